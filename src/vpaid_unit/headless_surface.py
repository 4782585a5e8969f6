"""Headless playback surface for simulated playback.

Implements the ``PlaybackSurface`` capabilities without any rendering: a tick
loop advances the media position on a ``TimeProvider`` and reports progress
and end-of-media like a video element would. Used by the default surface
factory, demos and integration tests.
"""

import asyncio
import math

from .config import HeadlessSurfaceConfig
from .exceptions import PlaybackStartError
from .log_config import get_context_logger
from .surface import (
    CompleteHandler,
    Container,
    InteractionHandler,
    InteractionKind,
    ProgressHandler,
    SurfaceFactory,
    SurfaceOptions,
)
from .time_provider import TimeProvider, create_time_provider


class HeadlessSurface:
    """Simulated video surface driven by virtual or wall-clock time.

    Features:
    - Position advances by ``tick_interval_sec`` per tick while playing
    - Progress handler called after every tick, completion once at the end
    - ``click()``, ``hover()`` and ``seek()`` simulate user actions
    - ``fail_on_play`` makes ``play()`` fail like a blocked autoplay

    Usage:
        from vpaid_unit import HeadlessSurface, HeadlessSurfaceConfig, Slot, SurfaceOptions

        async def main():
            config = HeadlessSurfaceConfig(duration_sec=10.0, tick_interval_sec=1.0)
            surface = HeadlessSurface("a.mp4", SurfaceOptions(640, 360), config)
            surface.attach(Slot(640, 360))
            surface.on_complete(lambda: print("ended"))
            await surface.play()
            await surface.wait_until_ended()

        asyncio.run(main())
    """

    def __init__(
        self,
        video_url: str,
        options: SurfaceOptions,
        config: HeadlessSurfaceConfig | None = None,
        time_provider: TimeProvider | None = None,
    ):
        """Initialize headless surface.

        Args:
            video_url: Resource to "play"
            options: Size and playback flags requested by the ad unit
            config: HeadlessSurfaceConfig (optional, uses default if None)
            time_provider: Time source (optional, built from config if None)
        """
        self.config = config or HeadlessSurfaceConfig()
        self.src = video_url
        self.options = options
        self.time_provider = time_provider or create_time_provider(
            self.config.time_mode, speed=self.config.speed
        )

        self.volume = self.config.initial_volume
        self.muted = options.muted
        self.container: Container | None = None
        self.ended = False

        self._position = 0.0
        self._metadata_loaded = False
        self._progress_handler: ProgressHandler | None = None
        self._complete_handler: CompleteHandler | None = None
        self._interaction_handler: InteractionHandler | None = None
        self._tick_task: asyncio.Task | None = None

        self.logger = get_context_logger("headless_surface")
        self.logger.debug(
            "Headless surface created",
            video_url=video_url,
            duration_sec=self.config.duration_sec,
            tick_interval=self.config.tick_interval_sec,
        )

    # ---- PlaybackSurface capabilities ----

    @property
    def current_position(self) -> float:
        return self._position

    @property
    def duration(self) -> float:
        # Like a media element, duration is unknown until playback is requested
        return self.config.duration_sec if self._metadata_loaded else math.nan

    @property
    def is_playing(self) -> bool:
        return self._tick_task is not None and not self._tick_task.done()

    async def play(self) -> None:
        """Begin or resume playback.

        Raises:
            PlaybackStartError: If configured to fail, or the surface is detached
        """
        if self.config.fail_on_play:
            raise PlaybackStartError("Playback was blocked", video_url=self.src)
        if self.container is None:
            raise PlaybackStartError("Surface is not attached", video_url=self.src)

        self._metadata_loaded = True
        if self.ended:
            self._position = 0.0
            self.ended = False
        if not self.is_playing:
            self._tick_task = asyncio.create_task(self._run())
        # Let the tick loop get scheduled before reporting success
        await asyncio.sleep(0)

    def pause(self) -> None:
        if self._tick_task is not None and not self._tick_task.done():
            self._tick_task.cancel()
        self._tick_task = None

    def attach(self, container: Container) -> None:
        self.container = container
        children = getattr(container, "children", None)
        if children is not None:
            children.append(self)

    def detach(self) -> None:
        children = getattr(self.container, "children", None)
        if children is not None and self in children:
            children.remove(self)
        self.container = None

    def on_progress(self, handler: ProgressHandler) -> None:
        self._progress_handler = handler

    def on_complete(self, handler: CompleteHandler) -> None:
        self._complete_handler = handler

    def on_interaction(self, handler: InteractionHandler) -> None:
        self._interaction_handler = handler

    # ---- Simulation controls ----

    def seek(self, position: float) -> None:
        """Jump to ``position`` seconds and report progress once."""
        self._metadata_loaded = True
        self._position = min(max(position, 0.0), self.config.duration_sec)
        self._notify_progress()

    def click(self) -> None:
        self._notify_interaction(InteractionKind.CLICK)

    def hover(self) -> None:
        self._notify_interaction(InteractionKind.MOUSEOVER)

    async def wait_until_ended(self) -> None:
        """Wait for the current tick loop to finish (end of media or pause)."""
        if self._tick_task is not None:
            try:
                await self._tick_task
            except asyncio.CancelledError:
                pass

    # ---- Internals ----

    async def _run(self) -> None:
        tick = self.config.tick_interval_sec
        duration = self.config.duration_sec

        self.logger.debug("Tick loop started", position=self._position)
        while self._position < duration:
            await self.time_provider.sleep(tick)
            self._position = min(self._position + tick, duration)
            self._notify_progress()

        self.ended = True
        self.logger.debug("End of media", position=self._position)
        if self._complete_handler is not None:
            self._complete_handler()

    def _notify_progress(self) -> None:
        if self._progress_handler is not None:
            self._progress_handler()

    def _notify_interaction(self, kind: InteractionKind) -> None:
        if self._interaction_handler is not None:
            self._interaction_handler(kind)


def headless_surface_factory(
    config: HeadlessSurfaceConfig | None = None,
    time_provider: TimeProvider | None = None,
) -> SurfaceFactory:
    """Build a ``SurfaceFactory`` producing HeadlessSurface instances.

    Args:
        config: Settings shared by every surface the factory builds
        time_provider: Shared time source (each surface builds its own if None)
    """

    def factory(video_url: str, options: SurfaceOptions) -> HeadlessSurface:
        return HeadlessSurface(video_url, options, config, time_provider)

    return factory


__all__ = ["HeadlessSurface", "headless_surface_factory"]
