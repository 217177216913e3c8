"""
Run one query against a snapshot directory and print the ranked results.

This script:
1) Loads media, notes and places from data/ (or the directory given with --data)
2) Parses the query and prints the active filter chips
3) Ranks all three collections and prints the results

Usage:
    python -m scripts.search_snapshot '@movie rating>4'
    python -m scripts.search_snapshot --data exports/ '"star wars" -spoiler'
"""

import argparse  # command-line options
import time  # measure step timings

from loguru import logger  # console logging

from tracker_search.config import Settings, setup_logging  # env-driven defaults
from tracker_search.data_loader import DataLoader  # data ingestion
from tracker_search.search_engine import SearchEngine  # parse + filter + rank


def main(argv=None):
	settings = Settings.from_env()
	parser = argparse.ArgumentParser(description="Search a tracker snapshot")
	parser.add_argument("query", help="query text in the search syntax")
	parser.add_argument("--data", default=str(settings.data_dir), help="snapshot directory")
	parser.add_argument("--log-level", default=settings.log_level, help="loguru level")
	args = parser.parse_args(argv)
	setup_logging(args.log_level)

	# Headline banner for visibility in console
	logger.info("=" * 60)
	logger.info("Search Snapshot")
	logger.info("=" * 60)

	# 1) Load data
	logger.info(f"[1/3] Loading snapshot from {args.data}...")
	snapshot = DataLoader().load_snapshot(args.data)
	engine = SearchEngine(snapshot, max_results=settings.max_results)

	# 2) Parse
	logger.info("[2/3] Parsing query...")
	chips = engine.filter_summary(args.query)
	logger.info(f"[OK] Filters: {chips if chips else 'none'}")
	if not engine.has_criteria(args.query):
		logger.info("Nothing to search for.")
		return 0

	# 3) Rank
	logger.info("[3/3] Ranking...")
	t0 = time.time()
	results = engine.search(args.query)
	logger.info(f"[OK] {len(results)} results in {(time.time() - t0) * 1000:.2f} ms")
	for i, r in enumerate(results, 1):
		title = getattr(r.entity, "title", None) or getattr(r.entity, "name", "")
		print(f"{i:>3}. [{r.score:>3}] {r.entity_type:<5} {title}")
	return 0


if __name__ == "__main__":
	raise SystemExit(main())
