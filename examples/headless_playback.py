"""Example: Drive a VPAID ad unit through a full session on the headless surface."""
import asyncio
import json
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from vpaid_unit import AdEvent, AdUnitConfig, HeadlessSurfaceConfig, Slot, UnitFactory
from vpaid_unit.log_config import AdSessionContext, configure_logging


async def main() -> None:
    configure_logging(level="INFO")
    config = AdUnitConfig(surface=HeadlessSurfaceConfig(duration_sec=15.0, tick_interval_sec=0.5))
    unit = UnitFactory.create(config=config)

    for event in AdEvent:
        unit.subscribe(lambda data=None, name=event.value: print(f"<- {name} {data or ''}"), event.value)

    with AdSessionContext(host="example-player"):
        print(f"Ad version: {unit.handshake_version('2.0')}")
        ad_parameters = {
            "videoUrl": "https://cdn.example.com/creative.mp4",
            "clickThroughUrl": "https://advertiser.example.com",
            "skippableAfter": 5,
        }
        unit.init_ad(640, 360, "normal", 500, {"AdParameters": json.dumps(ad_parameters)}, {"slot": Slot()})

        surface = unit.surface
        await unit.start_ad()
        surface.click()
        await surface.wait_until_ended()
        unit.stop_ad()

    print(json.dumps(unit.session.to_dict()["quartiles"], indent=2))


if __name__ == "__main__":
    asyncio.run(main())
