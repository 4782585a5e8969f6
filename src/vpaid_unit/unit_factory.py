"""
Ad Unit Factory

Builds ``VpaidAdUnit`` instances wired with a surface factory, a metrics
backend and configuration. ``get_vpaid_ad()`` is the entry point a host
calls to obtain a fresh unit, mirroring the VPAID ``getVPAIDAd`` global.
"""

from functools import lru_cache

from .ad_unit import VpaidAdUnit
from .config import AdUnitConfig
from .headless_surface import headless_surface_factory
from .log_config import configure_logging, get_context_logger
from .metrics import MetricsCollector, NoOpMetrics, PrometheusMetrics
from .settings import Settings, get_settings
from .surface import SurfaceFactory
from .time_provider import TimeProvider


logger = get_context_logger("unit_factory")


class UnitFactory:
    """
    Factory for creating configured ad units.

    Examples:
        Defaults (headless surface, no-op metrics):
        >>> unit = UnitFactory.create()
        >>> unit.state
        <AdState.UNINITIALIZED: 'uninitialized'>

        From YAML/environment settings:
        >>> unit = UnitFactory.create_from_settings(Settings.load_from_yaml(path))

        With a host-specific surface:
        >>> unit = UnitFactory.create(surface_factory=my_video_element_factory)
    """

    @staticmethod
    def create(
        config: AdUnitConfig | None = None,
        surface_factory: SurfaceFactory | None = None,
        metrics: MetricsCollector | None = None,
        time_provider: TimeProvider | None = None,
    ) -> VpaidAdUnit:
        """
        Create an ad unit.

        Args:
            config: Unit configuration (defaults to AdUnitConfig())
            surface_factory: Surface builder (defaults to headless surfaces
                configured from ``config.surface``)
            metrics: Metrics collector (defaults to NoOpMetrics)
            time_provider: Clock used for event timestamps

        Returns:
            VpaidAdUnit: Fresh, uninitialized unit
        """
        if config is None:
            config = AdUnitConfig()
        if surface_factory is None:
            surface_factory = headless_surface_factory(config.surface)

        unit = VpaidAdUnit(
            config=config,
            surface_factory=surface_factory,
            metrics=metrics,
            time_provider=time_provider,
        )
        logger.debug(
            "Ad unit created",
            session_id=unit.session.session_id,
            vpaid_version=config.vpaid_version,
        )
        return unit

    @staticmethod
    def create_from_settings(
        settings: Settings,
        surface_factory: SurfaceFactory | None = None,
    ) -> VpaidAdUnit:
        """
        Create an ad unit from loaded Settings.

        The metrics backend is picked from ``settings.metrics_backend``
        ("noop" or "prometheus").
        """
        return UnitFactory.create(
            config=settings.to_unit_config(),
            surface_factory=surface_factory,
            metrics=UnitFactory.create_metrics(settings.metrics_backend),
        )

    @staticmethod
    def create_metrics(backend: str) -> MetricsCollector:
        """
        Create a metrics collector by backend name.

        Unknown backends fall back to NoOpMetrics with a warning.
        """
        backend = backend.lower()
        if backend == "prometheus":
            return _default_prometheus_metrics()
        if backend != "noop":
            logger.warning("Unknown metrics backend, metrics disabled", backend=backend)
        return NoOpMetrics()


@lru_cache(maxsize=1)
def _default_prometheus_metrics() -> PrometheusMetrics:
    # Instruments on the default registry can only be registered once
    return PrometheusMetrics()


@lru_cache(maxsize=1)
def _configure_logging_once(level: str, json_output: bool) -> None:
    configure_logging(level=level, json_output=json_output)


def create_ad_unit(
    config: AdUnitConfig | None = None,
    surface_factory: SurfaceFactory | None = None,
    metrics: MetricsCollector | None = None,
) -> VpaidAdUnit:
    """Convenience wrapper around ``UnitFactory.create``."""
    return UnitFactory.create(config=config, surface_factory=surface_factory, metrics=metrics)


def get_vpaid_ad() -> VpaidAdUnit:
    """
    Entry point for the host player: return a new ad unit.

    Configuration comes from the cached settings (settings/config.yaml plus
    VPAID_* environment variables).
    """
    settings = get_settings()
    _configure_logging_once(settings.log_level, settings.log_json)
    return UnitFactory.create_from_settings(settings)


__all__ = [
    "UnitFactory",
    "create_ad_unit",
    "get_vpaid_ad",
]
