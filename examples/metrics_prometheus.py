"""Example: Export ad unit metrics to Prometheus."""
import asyncio
import json
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from prometheus_client import CollectorRegistry, generate_latest

from vpaid_unit import Slot, UnitFactory
from vpaid_unit.metrics import PrometheusMetrics


async def main() -> None:
    registry = CollectorRegistry()
    unit = UnitFactory.create(metrics=PrometheusMetrics(registry=registry))

    unit.init_ad(640, 360, "normal", 500, {"AdParameters": json.dumps({"videoUrl": "a.mp4"})}, {"slot": Slot()})
    surface = unit.surface
    await unit.start_ad()
    await surface.wait_until_ended()
    unit.stop_ad()

    print(generate_latest(registry).decode())


if __name__ == "__main__":
    asyncio.run(main())
