"""Generate chart data for static export."""
import argparse
import asyncio
import json
import logging

from real_terms.config import DENOMINATORS, TIME_RANGES, Settings
from real_terms.data.pipeline import load_dashboard_data
from real_terms.indicators.denominators import (
    filter_time_range,
    performance_summary,
    transform_rows,
)

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")

parser = argparse.ArgumentParser(description="Write transformed chart rows to JSON")
parser.add_argument("--denominator", choices=list(DENOMINATORS), default="GOLD")
parser.add_argument("--range", dest="time_range", choices=list(TIME_RANGES), default="5Y")
parser.add_argument("--nominal", action="store_true", help="Disable indexing to 100")
parser.add_argument("--out", default="chart_data.json")
args = parser.parse_args()

payload = asyncio.run(load_dashboard_data(Settings()))
if not payload["success"]:
    raise SystemExit(f"Failed to load data: {payload['error']}")

window = filter_time_range(payload["data"], args.time_range)
chart = transform_rows(window, args.denominator, indexed=not args.nominal)

output = {
    'denominator': args.denominator,
    'range': args.time_range,
    'indexed': not args.nominal,
    'isFallback': payload['isFallback'],
    'sources': payload['sources'],
    'chart': chart,
    'performance': performance_summary(chart),
}

with open(args.out, 'w') as f:
    json.dump(output, f)

print(f"Saved {len(chart)} months of data to {args.out}")
