#!/usr/bin/env python3
"""
Filter Effectiveness Report

Replays the default filter state, every named preset and every range picker
option against a grants CSV export and prints how many grants each matches.
Useful before changing a preset or a default: a preset matching 0% or 100%
of the dataset is not doing its job.

How to use: python scripts/analyze_filter_effectiveness.py grants.csv [--json]
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.analysis.filter_effectiveness import (  # noqa: E402
    analyze_presets,
    analyze_range_presets,
    load_grants_csv,
)
from settings.infrastructure_config import get_filter_config  # noqa: E402
from utils.time_utils import parse_iso_timestamp, utc_now  # noqa: E402

# Configure logging
logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)


def run_report(csv_path: str, as_of: Optional[str] = None, as_json: bool = False) -> int:
    """
    Build and print the report.

    Args:
        csv_path: Grants CSV export
        as_of: ISO timestamp to evaluate deadlines against (default: now)
        as_json: Print JSON instead of tables

    Returns:
        Process exit code
    """
    path = Path(csv_path)
    if not path.exists():
        logger.error(f"Grants file not found: {csv_path}")
        return 1

    now = parse_iso_timestamp(as_of) if as_of else utc_now()
    config = get_filter_config()
    grants_df = load_grants_csv(str(path))

    presets_df = analyze_presets(grants_df, now=now, config=config)
    ranges_df = analyze_range_presets(grants_df, now=now, config=config)

    if as_json:
        report = {
            "as_of": now.isoformat(),
            "total_grants": len(grants_df),
            "presets": presets_df.to_dict(orient="records"),
            "ranges": ranges_df.to_dict(orient="records"),
        }
        print(json.dumps(report, indent=2))
        return 0

    print(f"📊 Filter effectiveness for {len(grants_df)} grants (as of {now.isoformat()})")
    print("=" * 60)
    print(presets_df.to_string(index=False))
    print()
    print(ranges_df.to_string(index=False))

    unused = presets_df[(presets_df["matches"] == 0) & (presets_df["name"] != "DEFAULT")]
    for _, row in unused.iterrows():
        logger.warning(f"Preset {row['name']} matches no grants")

    return 0


def main() -> None:
    """Main entry point for the script."""
    parser = argparse.ArgumentParser(description="Filter Effectiveness Report")
    parser.add_argument("csv_path", help="Path to a grants CSV export")
    parser.add_argument("--as-of", type=str, help="Evaluate deadlines as of this ISO timestamp")
    parser.add_argument("--json", action="store_true", help="Print the report as JSON")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")

    args = parser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    sys.exit(run_report(args.csv_path, as_of=args.as_of, as_json=args.json))


if __name__ == "__main__":
    main()
