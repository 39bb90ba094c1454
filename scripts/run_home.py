#!/usr/bin/env python3
"""Run the Utopia home simulation with compressed time and print status.

Usage
-----
::

    python scripts/run_home.py --minute-seconds 0.05 --minutes 30

Options::

    --minute-seconds S   Wall seconds per simulated minute (default: 0.05)
    --minutes N          Simulated minutes to run (default: 30)
    --room NAME          Room to drive commands against (default: Living Room)
    --json               Print final snapshots as JSON
    --verbose / -v       Enable debug logging
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from datetime import UTC, datetime, timedelta
from pathlib import Path

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pyutopia import UtopiaConfig, UtopiaHome  # noqa: E402


def _section(title: str) -> str:
    return f"\n── {title} " + "─" * max(0, 60 - len(title))


async def main() -> None:
    parser = argparse.ArgumentParser(description="Run the Utopia home simulation and print device status.")
    parser.add_argument("--minute-seconds", type=float, default=0.05, help="Wall seconds per simulated minute")
    parser.add_argument("--minutes", type=float, default=30.0, help="Simulated minutes to run")
    parser.add_argument("--room", default="Living Room", help="Room to drive commands against")
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Print final snapshots as JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    config = UtopiaConfig.from_env(minute_seconds=args.minute_seconds)
    room = args.room

    async with UtopiaHome(config) as home:
        print(_section("COMMANDS"))
        print(await home.invoke("thermostat_set_temperature", room=room, temperature=23.5))
        print(await home.invoke("humiditycontrol_set_humidity", room=room, humidity=45.0))
        print(await home.invoke("airquality_degrade", room=room, quality="Moderate"))
        print(await home.invoke("airquality_set_power", room=room, on=True))
        arrive_at = datetime.now(UTC) + timedelta(minutes=10)
        print(await home.invoke("blinds_set_state_with_timer", room=room, percent=40, target_time=arrive_at))
        print(await home.invoke("vacuum_start", room=room))
        print(await home.invoke("bed_set_for_sleep", temperature=21.0, hours=1))
        print(await home.invoke("car_drive_to", latitude=51.4995, longitude=-0.1248))

        await asyncio.sleep(args.minutes * config.minute_seconds)

        print(_section("STATUS"))
        print(await home.invoke("thermostat_get_status", room=room))
        print(await home.invoke("humiditycontrol_get_status", room=room))
        print(await home.invoke("airquality_get_status", room=room))
        print(await home.invoke("blinds_get_state", room=room))
        print(await home.invoke("vacuum_get_status"), end="")
        print(await home.invoke("bed_get_status"))
        print(await home.invoke("car_get_status"))

        if args.json_mode:
            snapshots = {
                "thermostat": await home.thermostat.snapshot(room),
                "humidity": await home.humidity.snapshot(room),
                "air_quality": await home.air_quality.snapshot(room),
                "blinds": await home.blinds.snapshot(room),
                "vacuum": await home.vacuum.snapshot(),
                "bed": await home.bed.snapshot(),
                "vehicle": await home.vehicle.snapshot(),
            }
            payload = {
                name: snapshot.model_dump(mode="json") if snapshot is not None else None
                for name, snapshot in snapshots.items()
            }
            print(json.dumps(payload, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    asyncio.run(main())
