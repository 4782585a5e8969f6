"""Playback surface capability interface.

The ad unit never touches a concrete video element. It talks to a
``PlaybackSurface`` created by a ``SurfaceFactory`` inside a host-provided
``Container``. Tests plug in a fake, demos use ``HeadlessSurface``.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import Protocol, runtime_checkable


class InteractionKind(str, Enum):
    """Raw interaction signals a surface can report."""

    CLICK = "click"
    MOUSEOVER = "mouseover"


ProgressHandler = Callable[[], None]
CompleteHandler = Callable[[], None]
InteractionHandler = Callable[[InteractionKind], None]


@runtime_checkable
class Container(Protocol):
    """Host-owned slot the surface is attached to."""

    width: int
    height: int


@dataclass
class Slot:
    """Minimal in-process container with a fixed size.

    Keeps track of attached surfaces so hosts and tests can verify
    attach/detach side effects.
    """

    width: int = 640
    height: int = 360

    def __post_init__(self):
        self.children: list["PlaybackSurface"] = []


@runtime_checkable
class PlaybackSurface(Protocol):
    """Capabilities the ad unit needs from a video playback surface."""

    @property
    def current_position(self) -> float:
        """Current playback position in seconds."""
        ...

    @property
    def duration(self) -> float:
        """Media duration in seconds; NaN while unknown."""
        ...

    volume: float
    muted: bool

    def play(self) -> Awaitable[None]:
        """Begin or resume playback. Resolves once playback has started."""
        ...

    def pause(self) -> None:
        ...

    def attach(self, container: Container) -> None:
        ...

    def detach(self) -> None:
        ...

    def on_progress(self, handler: ProgressHandler) -> None:
        ...

    def on_complete(self, handler: CompleteHandler) -> None:
        ...

    def on_interaction(self, handler: InteractionHandler) -> None:
        ...


@dataclass(frozen=True)
class SurfaceOptions:
    """How the unit asks the factory to build a surface."""

    width: int
    height: int
    muted: bool = True
    inline: bool = True


SurfaceFactory = Callable[[str, SurfaceOptions], PlaybackSurface]
"""Builds a surface for a video URL: ``factory(video_url, options)``."""


__all__ = [
    "InteractionKind",
    "ProgressHandler",
    "CompleteHandler",
    "InteractionHandler",
    "Container",
    "Slot",
    "PlaybackSurface",
    "SurfaceOptions",
    "SurfaceFactory",
]
