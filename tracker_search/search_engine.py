"""
Search engine module.
Holds the current collection snapshot and answers queries against it.
"""

from typing import List, Optional  # type annotations for clarity

# Import project modules for data structures and components
from .models import CollectionSnapshot, ParsedQuery, ScoredResult  # core data classes
from .query_parser import QueryParser, get_filter_summary, has_search_criteria  # query understanding
from .ranking import DEFAULT_MAX_RESULTS, ResultRanker  # filtering and scoring

# Import loguru for console logging
from loguru import logger  # simple structured logger


class SearchEngine:
	"""
	High-level search API combining query parsing, filtering, and ranking.
	Every call ranks against the snapshot current at call time; callers swap in
	a new snapshot whenever their data source changes.
	"""
	def __init__(
		self,
		snapshot: Optional[CollectionSnapshot] = None,  # initial collections
		max_results: int = DEFAULT_MAX_RESULTS,  # result cap
	):
		self.parser = QueryParser()  # stateless parser
		self.ranker = ResultRanker(max_results=max_results, parser=self.parser)  # ranker instance
		self.snapshot = snapshot if snapshot is not None else CollectionSnapshot()  # keep snapshot reference
		logger.info(f"[Engine] Ready with {len(self.snapshot)} items (max_results={max_results})")

	def update_snapshot(self, snapshot: CollectionSnapshot) -> None:
		"""Replace the collections searched by subsequent calls."""
		self.snapshot = snapshot
		logger.debug(f"[Engine] Snapshot replaced: {len(snapshot)} items")

	def parse_query(self, query: str) -> ParsedQuery:
		"""Parse the raw query into a structured representation."""
		return self.parser.parse(query)  # delegate to parser

	def has_criteria(self, query: str) -> bool:
		"""Whether `query` asks for anything; lets callers tell "no query" from "no matches"."""
		return has_search_criteria(self.parse_query(query))

	def filter_summary(self, query: str) -> List[str]:
		"""Chip labels for the hard filters in `query`."""
		return get_filter_summary(self.parse_query(query))

	def search(self, query: str) -> List[ScoredResult]:
		"""Rank all three collections of the current snapshot for `query`."""
		snapshot = self.snapshot  # read once so a concurrent swap cannot mix snapshots
		results = self.ranker.rank(query, snapshot.media, snapshot.notes, snapshot.places)
		logger.info(f"[Engine] Returning {len(results)} results for '{query}'")  # summary
		return results
