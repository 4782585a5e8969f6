"""
VPAID 2.0 Ad Unit

The controllable side of the VPAID protocol. A host player creates the unit
(usually through ``get_vpaid_ad()``), negotiates the version, initializes it
with creative data and a slot, then drives it through start/pause/resume/
skip/stop while receiving notifications through ``subscribe``.

Every public method completes without raising: failures reach the host only
as ``AdError`` events.
"""

import asyncio
import functools
import math
from collections.abc import Callable, Mapping
from typing import Any

from .ad_session import AdSession, AdState
from .config import SUPPORTED_VPAID_VERSION, AdUnitConfig
from .event_bus import EventBus, EventCallback
from .events import AdEvent, UnitLogEvents
from .exceptions import ParameterDecodeError, PlaybackStartError, VpaidException
from .headless_surface import headless_surface_factory
from .log_config import (
    clear_session_context,
    get_context_logger,
    set_session_context,
    update_playback_progress,
)
from .metrics import MetricLabels, MetricsCollector, NoOpMetrics, UnitMetrics
from .parameters import decode_ad_parameters
from .surface import (
    Container,
    InteractionKind,
    PlaybackSurface,
    SurfaceFactory,
    SurfaceOptions,
)
from .time_provider import RealtimeTimeProvider, TimeProvider


def _is_positive_finite(value: Any) -> bool:
    return isinstance(value, (int, float)) and math.isfinite(value) and value > 0


def host_call(default: Any = None) -> Callable:
    """Keep exceptions from crossing into the host.

    Anything a wrapped method raises is logged and reported as ``AdError``;
    the host gets ``default`` back.
    """

    def decorator(method: Callable) -> Callable:
        @functools.wraps(method)
        def wrapper(self: "VpaidAdUnit", *args: Any, **kwargs: Any) -> Any:
            try:
                return method(self, *args, **kwargs)
            except VpaidException as e:
                self._report_error(e)
            except Exception as e:
                self._report_error(
                    VpaidException(
                        f"Unexpected error in {method.__name__}.",
                        context={"error": str(e), "error_type": type(e).__name__},
                    )
                )
            return default

        return wrapper

    return decorator


class VpaidAdUnit:
    """
    Linear video ad unit speaking VPAID 2.0.

    Owns one ``AdSession`` and, between ``init_ad`` and ``stop_ad``, one
    playback surface. Raw surface signals (progress, end of media, clicks)
    are translated into one-shot VPAID events.

    Usage:
        from vpaid_unit import Slot, VpaidAdUnit

        async def main():
            unit = VpaidAdUnit()
            unit.subscribe(lambda data: print("loaded"), "AdLoaded")
            unit.handshake_version("2.0")
            unit.init_ad(640, 360, "normal", 500,
                         {"AdParameters": '{"videoUrl": "a.mp4"}'},
                         {"slot": Slot(640, 360)})
            await unit.start_ad()  # AdStarted follows the returned task

        asyncio.run(main())
    """

    def __init__(
        self,
        config: AdUnitConfig | None = None,
        surface_factory: SurfaceFactory | None = None,
        metrics: MetricsCollector | None = None,
        time_provider: TimeProvider | None = None,
    ):
        """
        Initialize the ad unit.

        Args:
            config: AdUnitConfig (optional, uses default if None)
            surface_factory: Builds the playback surface during init_ad
                (defaults to a headless surface factory from config.surface)
            metrics: Metrics collector (defaults to NoOpMetrics)
            time_provider: Clock for event timestamps and time-to-start
        """
        self.config = config or AdUnitConfig()
        self.surface_factory = surface_factory or headless_surface_factory(self.config.surface)
        self.metrics = metrics or NoOpMetrics()
        self.time_provider = time_provider or RealtimeTimeProvider()

        self.events = EventBus(self.metrics)
        self.session = AdSession()

        self._surface: PlaybackSurface | None = None
        self._container: Container | None = None
        self._active = False
        self._skipping = False
        self._pending_tasks: set[asyncio.Task] = set()

        self.logger = get_context_logger("vpaid_ad_unit")

    @property
    def state(self) -> AdState:
        return self.session.state

    @property
    def surface(self) -> PlaybackSurface | None:
        """The playback surface owned by this unit, or None once released."""
        return self._surface

    # ------------------------------------------------------------------
    # Protocol methods
    # ------------------------------------------------------------------

    @host_call(default=SUPPORTED_VPAID_VERSION)
    def handshake_version(self, player_version: str) -> str:
        """Return the VPAID version this unit supports.

        Compatibility is the host's call; the unit only reports its version.
        """
        self.logger.info(
            UnitLogEvents.HANDSHAKE.value,
            player_version=player_version,
            ad_version=self.config.vpaid_version,
        )
        return self.config.vpaid_version

    @host_call()
    def init_ad(
        self,
        width: int,
        height: int,
        view_mode: str,
        desired_bitrate: int,
        creative_data: Mapping[str, Any] | None = None,
        environment_vars: Mapping[str, Any] | None = None,
    ) -> None:
        """Decode creative data, create the surface in the slot and emit AdLoaded.

        Decode failures and a missing video URL are reported as AdError and
        leave the unit uninitialized with no surface created.
        """
        if self.session.state != AdState.UNINITIALIZED:
            self._report_error(
                VpaidException(
                    "Ad is already initialized.", context={"state": self.session.state.value}
                )
            )
            return

        self.logger.info(
            UnitLogEvents.INIT_STARTED.value,
            width=width,
            height=height,
            view_mode=view_mode,
            desired_bitrate=desired_bitrate,
        )

        if isinstance(environment_vars, Mapping):
            self._container = environment_vars.get("slot")

        try:
            parameters = decode_ad_parameters(creative_data)
        except ParameterDecodeError as e:
            self._fail_init(e)
            return

        container = self._container
        if container is None:
            self._fail_init(VpaidException("Ad slot not found in environmentVars."))
            return

        options = SurfaceOptions(
            width=getattr(container, "width", width),
            height=getattr(container, "height", height),
            muted=self.config.start_muted,
            inline=self.config.inline,
        )
        try:
            surface = self.surface_factory(parameters.video_url, options)
            surface.muted = self.config.start_muted
            surface.attach(container)
        except Exception as e:
            self._fail_init(
                VpaidException(
                    "Failed to create the video element.",
                    context={"error": str(e), "error_type": type(e).__name__},
                )
            )
            return

        surface.on_progress(functools.partial(self._on_progress, surface))
        surface.on_complete(functools.partial(self._on_complete, surface))
        surface.on_interaction(functools.partial(self._on_interaction, surface))

        self._surface = surface
        self._active = True
        self.session.parameters = parameters
        self.session.transition(AdState.LOADED)
        self.metrics.gauge(UnitMetrics.ACTIVE_SESSIONS, 1)

        set_session_context(
            session_id=self.session.session_id,
            video_url=parameters.video_url,
        )
        self.logger.info(
            UnitLogEvents.LOADED.value,
            skip_policy=type(parameters.skip_policy).__name__,
            width=options.width,
            height=options.height,
        )
        self._emit(AdEvent.AD_LOADED)

    @host_call()
    def start_ad(self) -> asyncio.Task | None:
        """Begin playback asynchronously.

        Returns immediately with the task running the play request; AdStarted
        or AdError is emitted when that task completes. Requires a running
        event loop.
        """
        self.logger.info(UnitLogEvents.START_REQUESTED.value, state=self.session.state.value)
        requested_at = self.time_provider.now()

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._report_error(
                PlaybackStartError(
                    "Video failed to start.", context={"reason": "no running event loop"}
                ),
                UnitMetrics.START_FAILURES,
            )
            return None

        return self._track_task(loop.create_task(self._begin_playback(requested_at)))

    @host_call()
    def stop_ad(self) -> None:
        """Release the surface and emit AdStopped. Repeated calls are no-ops."""
        if self.session.is_stopped:
            self.logger.debug("Stop ignored, ad already stopped")
            return

        self._release_surface()
        self.session.transition(AdState.STOPPED)
        self.session.end_time = self.time_provider.now()
        if self._active:
            self._active = False
            self.metrics.gauge(UnitMetrics.ACTIVE_SESSIONS, -1)

        self.logger.info(
            UnitLogEvents.PLAYBACK_STOPPED.value,
            offset_sec=self.session.current_offset_sec,
            events_emitted=len(self.session.events),
        )
        self._emit(AdEvent.AD_STOPPED)
        clear_session_context()

    @host_call()
    def skip_ad(self) -> None:
        """Skip the ad if it has become skippable; otherwise only log."""
        if not self.session.skippable:
            self.logger.info(
                UnitLogEvents.SKIP_REJECTED.value,
                reason="not skippable yet",
                offset_sec=self.session.current_offset_sec,
            )
            return
        if self.session.is_stopped or self._skipping:
            self.logger.info(UnitLogEvents.SKIP_REJECTED.value, reason="already skipped or stopped")
            return
        self._skipping = True

        self.logger.info(
            UnitLogEvents.SKIP_ACCEPTED.value, offset_sec=self.session.current_offset_sec
        )
        self.metrics.increment(UnitMetrics.SKIPS)
        self._emit(AdEvent.AD_SKIPPED)
        self.stop_ad()

    @host_call()
    def pause_ad(self) -> None:
        if self._surface is not None:
            self._surface.pause()
        if self.session.state == AdState.PLAYING:
            self.session.transition(AdState.PAUSED)
        self.logger.info(
            UnitLogEvents.PLAYBACK_PAUSED.value, offset_sec=self.session.current_offset_sec
        )
        self._emit(AdEvent.AD_PAUSED)

    @host_call()
    def resume_ad(self) -> None:
        surface = self._surface
        if surface is not None:
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError:
                self.logger.warning("Cannot resume surface without a running event loop")
            else:
                self._track_task(loop.create_task(self._resume_playback(surface)))
        if self.session.state == AdState.PAUSED:
            self.session.transition(AdState.PLAYING)
        self.logger.info(
            UnitLogEvents.PLAYBACK_RESUMED.value, offset_sec=self.session.current_offset_sec
        )
        self._emit(AdEvent.AD_PLAYING)

    # ------------------------------------------------------------------
    # Properties exposed to the host
    # ------------------------------------------------------------------

    @host_call(default=False)
    def get_ad_skippable_state(self) -> bool:
        return self.session.skippable

    @host_call(default=False)
    def get_ad_icons(self) -> bool:
        return False

    @host_call(default=True)
    def get_ad_linear(self) -> bool:
        return True

    @host_call(default=False)
    def get_ad_expanded(self) -> bool:
        return False

    @host_call(default=0.0)
    def get_ad_remaining_time(self) -> float:
        """Seconds left in the creative; 0 while the duration is unknown."""
        surface = self._surface
        if surface is None or not _is_positive_finite(surface.duration):
            return 0.0
        return max(0.0, surface.duration - surface.current_position)

    @host_call(default=0.0)
    def get_ad_duration(self) -> float:
        surface = self._surface
        if surface is None or not _is_positive_finite(surface.duration):
            return 0.0
        return float(surface.duration)

    @host_call(default=0.0)
    def get_ad_volume(self) -> float:
        if self._surface is None:
            return 0.0
        return self._surface.volume

    @host_call()
    def set_ad_volume(self, volume: float) -> None:
        """Apply ``volume`` (clamped to [0, 1]) and emit AdVolumeChange."""
        volume = float(volume)
        if not math.isfinite(volume):
            raise VpaidException("Volume must be a finite number.", context={"volume": volume})
        volume = min(max(volume, 0.0), 1.0)
        if self._surface is not None:
            self._surface.volume = volume
        self.logger.debug("Volume changed", volume=volume)
        self._emit(AdEvent.AD_VOLUME_CHANGE)

    @host_call(default=0)
    def get_ad_width(self) -> int:
        return int(getattr(self._container, "width", 0) or 0)

    @host_call(default=0)
    def get_ad_height(self) -> int:
        return int(getattr(self._container, "height", 0) or 0)

    def resize_ad(self, width: int, height: int, view_mode: str) -> None:
        pass

    def expand_ad(self) -> None:
        pass

    def collapse_ad(self) -> None:
        pass

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------

    @host_call()
    def subscribe(self, callback: EventCallback, event_name: str, context: Any = None) -> None:
        """Register the host callback for ``event_name`` (one per name)."""
        self.events.subscribe(event_name, callback, context)

    @host_call()
    def unsubscribe(self, event_name: str) -> None:
        self.events.unsubscribe(event_name)

    # ------------------------------------------------------------------
    # Async playback
    # ------------------------------------------------------------------

    async def _begin_playback(self, requested_at: float) -> None:
        if self.session.is_stopped:
            self.logger.info("Start abandoned, ad was stopped")
            return

        surface = self._surface
        if surface is None or self.session.state != AdState.LOADED:
            self._report_error(
                PlaybackStartError(
                    "Video failed to start.", context={"state": self.session.state.value}
                ),
                UnitMetrics.START_FAILURES,
            )
            return

        try:
            await surface.play()
        except Exception as e:
            if surface is not self._surface:
                self.logger.info("Play failure ignored, surface already released")
                return
            error = PlaybackStartError(
                "Video failed to start.",
                video_url=self.session.parameters.video_url if self.session.parameters else None,
                cause=e,
            )
            self.logger.warning(
                UnitLogEvents.PLAYBACK_START_FAILED.value, error=str(e), error_type=type(e).__name__
            )
            self._report_error(error, UnitMetrics.START_FAILURES)
            return

        # Stopped while the play request was in flight
        if surface is not self._surface or self.session.state != AdState.LOADED:
            self.logger.info("Playback start ignored", state=self.session.state.value)
            return

        now = self.time_provider.now()
        self.session.transition(AdState.PLAYING)
        self.session.start_time = now
        self.metrics.timing(UnitMetrics.TIME_TO_START_MS, (now - requested_at) * 1000)
        self.logger.info(UnitLogEvents.PLAYBACK_STARTED.value, muted=surface.muted)
        self._emit(AdEvent.AD_STARTED)

    async def _resume_playback(self, surface: PlaybackSurface) -> None:
        try:
            await surface.play()
        except Exception as e:
            if surface is not self._surface:
                return
            self.logger.warning("Resume failed", error=str(e), error_type=type(e).__name__)
            self._report_error(PlaybackStartError("Video failed to resume.", cause=e))

    def _track_task(self, task: asyncio.Task) -> asyncio.Task:
        self._pending_tasks.add(task)
        task.add_done_callback(self._pending_tasks.discard)
        return task

    # ------------------------------------------------------------------
    # Surface signal translation
    # ------------------------------------------------------------------

    def _on_progress(self, surface: PlaybackSurface) -> None:
        if surface is not self._surface:
            self._drop_signal("progress")
            return

        elapsed = surface.current_position
        duration = surface.duration
        self.session.current_offset_sec = elapsed
        if not _is_positive_finite(duration):
            return

        progress = elapsed / duration
        if self.config.emit_progress_logs:
            update_playback_progress(
                playback_seconds=round(elapsed, 3),
                progress_percent=round(progress * 100, 1),
            )
            self.logger.debug("Progress", elapsed=elapsed, duration=duration)

        parameters = self.session.parameters
        if (
            parameters is not None
            and parameters.skip_policy.is_eligible(elapsed)
            and self.session.mark_skippable()
        ):
            self.logger.info(UnitLogEvents.SKIP_ENABLED.value, offset_sec=elapsed)
            self._emit(AdEvent.AD_SKIPPABLE_STATE_CHANGE)

        for event in self.session.pending_quartiles(progress):
            # A host callback may have stopped the ad mid-tick
            if surface is not self._surface:
                break
            if not self.session.mark_quartile(event):
                continue
            self.logger.info(
                UnitLogEvents.QUARTILE_REACHED.value,
                quartile=event.value,
                offset_sec=elapsed,
            )
            self._emit(event)

    def _on_complete(self, surface: PlaybackSurface) -> None:
        if surface is not self._surface:
            self._drop_signal("complete")
            return
        if not self.session.mark_complete():
            return

        self.logger.info(
            UnitLogEvents.PLAYBACK_COMPLETED.value, offset_sec=surface.current_position
        )
        self._emit(AdEvent.AD_VIDEO_COMPLETE)

    def _on_interaction(self, surface: PlaybackSurface, kind: InteractionKind) -> None:
        if surface is not self._surface:
            self._drop_signal("interaction")
            return

        if kind == InteractionKind.CLICK:
            parameters = self.session.parameters
            self._emit(
                AdEvent.AD_CLICK_THRU,
                {
                    "url": (parameters.click_through_url if parameters else None) or "",
                    "id": self.config.click_id,
                    "playerHandles": self.config.player_handles_click,
                },
            )
        elif kind == InteractionKind.MOUSEOVER:
            self._emit(AdEvent.AD_INTERACTION, {"id": self.config.interaction_id})
        else:
            self.logger.debug("Unhandled interaction", kind=kind)

    def _drop_signal(self, signal: str) -> None:
        self.metrics.increment(UnitMetrics.SIGNALS_DROPPED, labels={MetricLabels.SIGNAL: signal})
        self.logger.debug(UnitLogEvents.SIGNAL_DROPPED.value, signal=signal)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _release_surface(self) -> None:
        surface, self._surface = self._surface, None
        if surface is None:
            return
        # Teardown must finish even if the surface misbehaves
        try:
            surface.pause()
        except Exception as e:
            self.logger.warning("Surface pause failed during stop", error=str(e))
        try:
            surface.detach()
        except Exception as e:
            self.logger.warning("Surface detach failed during stop", error=str(e))

    def _fail_init(self, error: VpaidException) -> None:
        self.logger.warning(
            UnitLogEvents.INIT_FAILED.value,
            error=error.message,
            error_type=type(error).__name__,
            context=error.context,
        )
        self._report_error(error, UnitMetrics.INIT_FAILURES)

    def _report_error(self, error: VpaidException, metric: str | None = None) -> None:
        if metric is not None:
            self.metrics.increment(metric, labels={MetricLabels.ERROR_TYPE: type(error).__name__})
        self.logger.error("Ad error", error=str(error), error_type=type(error).__name__)
        self._emit(AdEvent.AD_ERROR, {"message": error.message})

    def _emit(self, event: AdEvent, data: dict[str, Any] | None = None) -> None:
        self.session.record_event(event, self.time_provider.now(), data)
        self.metrics.increment(
            UnitMetrics.EVENTS_EMITTED, labels={MetricLabels.EVENT_TYPE: event.value}
        )
        self.logger.debug(UnitLogEvents.EVENT_EMITTED.value, ad_event=event.value)
        self.events.emit(event.value, data)


__all__ = ["VpaidAdUnit", "host_call"]
