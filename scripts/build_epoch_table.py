"""Print new-moon instants in the format used by ``NEW_MOON_UTC``.

Example::

    python scripts/build_epoch_table.py --start 2027-01-01 --end 2028-01-01
"""

from __future__ import annotations

import argparse
import sys
from datetime import datetime, timezone
from pathlib import Path


REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from maramataka.services.new_moons import find_new_moons, format_epoch


def _parse_day(value: str) -> datetime:
    return datetime.fromisoformat(value).replace(tzinfo=timezone.utc)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--start", required=True, help="first day to search, YYYY-MM-DD")
    parser.add_argument("--end", required=True, help="day to stop before, YYYY-MM-DD")
    parser.add_argument("--per-line", type=int, default=4)
    args = parser.parse_args(argv)

    start, end = _parse_day(args.start), _parse_day(args.end)
    if end <= start:
        parser.error("--end must be after --start")

    epochs = [f'"{format_epoch(m)}"' for m in find_new_moons(start, end)]
    for i in range(0, len(epochs), args.per_line):
        print("    " + ", ".join(epochs[i : i + args.per_line]) + ",")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
