#!/usr/bin/env python3
"""Dump the car listing with repaired text and lifecycle stages.

Fetches every car visible to the configured token, repairs garbled
display fields and prints the dashboard counts followed by one block
per car. Raw values are printed next to the repaired ones so you can
spot rows the recovery heuristic does not fix.

Usage
-----
Set environment variables and run::

    export VTRACK_BASE_URL="https://example.com/api"
    export VTRACK_TOKEN="..."
    python scripts/dump_cars.py

Options::

    --stage STAGE        Only list cars in NEW, WAREHOUSE, SHIPPING or UNCLASSIFIED
    --search TEXT        Only list cars matching TEXT
    --json               Output as machine-readable JSON
    --output FILE        Write output to FILE instead of stdout
    -v, --verbose        Enable DEBUG logging
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pyvtrack import LifecycleStage, VtrackClient, VtrackConfig, count_stages, filter_by_stage, search_cars  # noqa: E402
from pyvtrack.models import Car  # noqa: E402


def _section(title: str) -> str:
    line = "=" * 60
    return f"\n{line}\n  {title}\n{line}"


def _car_entry(car: Car, agent_label: str) -> dict[str, Any]:
    display = car.display()
    display["agent_name"] = agent_label
    return {
        "id": car.id,
        "vin": car.vin,
        "title": car.title,
        "stage": car.stage.value,
        "display": display,
        "original": {key: car.raw_value(key) for key in display},
        "raw": car.raw,
    }


def _format_car(entry: dict[str, Any]) -> list[str]:
    lines = [f"\n  [{entry['stage']}] {entry['title']}  (id={entry['id']} vin={entry['vin']})"]
    originals = entry["original"]
    for key, value in entry["display"].items():
        if not value:
            continue
        lines.append(f"    {key}: {value}")
        original = originals.get(key)
        if isinstance(original, str) and original.strip() != value:
            lines.append(f"    raw {key}: {original!r}")
    return lines


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--stage", choices=[stage.value for stage in LifecycleStage], default=None)
    parser.add_argument("--search", default=None)
    parser.add_argument("--json", dest="json_mode", action="store_true")
    parser.add_argument("--output", default=None)
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


async def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    config = VtrackConfig.from_env()
    async with VtrackClient(config) as client:
        cars = await client.get_cars()
        counts = count_stages(cars)
        stage = LifecycleStage(args.stage) if args.stage else None
        selected = search_cars(filter_by_stage(cars, stage), args.search)
        entries = [_car_entry(car, await client.agent_display_name(car)) for car in selected]

    result = {"counts": counts.model_dump(), "cars": entries}

    if args.json_mode:
        payload = json.dumps(result, indent=2, default=str, ensure_ascii=False)
        if args.output:
            Path(args.output).write_text(payload, encoding="utf-8")
            print(f"JSON written to {args.output}", file=sys.stderr)
        else:
            print(payload)
        return

    out: list[str] = [_section("COUNTS")]
    for key, value in counts.model_dump().items():
        out.append(f"  {key}: {value}")
    out.append(_section(f"CARS ({len(entries)})"))
    for entry in entries:
        out.extend(_format_car(entry))

    text = "\n".join(out)
    if args.output:
        Path(args.output).write_text(text, encoding="utf-8")
        print(f"Output written to {args.output}")
    else:
        print(text)


if __name__ == "__main__":
    asyncio.run(main())
