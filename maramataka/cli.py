import argparse
import json
import sys
from datetime import date
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from maramataka.services.errors import OutOfRangeError
from maramataka.services.maramataka import daily_outlook


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Print the Maramataka outlook for a day as JSON.")
    parser.add_argument("date", help="YYYY-MM-DD")
    parser.add_argument("--lat", type=float, required=True)
    parser.add_argument("--lon", type=float, required=True)
    parser.add_argument("--tz", default="UTC", help="IANA timezone name, e.g. Pacific/Auckland")
    args = parser.parse_args(argv)

    try:
        day = date.fromisoformat(args.date)
    except ValueError:
        parser.error(f"invalid date {args.date!r}, expected YYYY-MM-DD")
    try:
        ZoneInfo(args.tz)
    except (ZoneInfoNotFoundError, ValueError):
        parser.error(f"unknown timezone {args.tz!r}")

    try:
        outlook = daily_outlook(day, args.lat, args.lon, tz=args.tz)
    except OutOfRangeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    print(json.dumps(outlook.model_dump(mode="json"), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
