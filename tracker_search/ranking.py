"""
Ranking module.
Evaluates a parsed query against media, notes and places and merges them into one ordered result list.
"""

from typing import Iterable, List, Optional, Sequence

from loguru import logger

from .filters import passes_hard_filters
from .fuzzy import SCORE_EXACT, fuzzy_score_multi
from .models import Entity, Media, Note, ParsedQuery, Place, ScoredResult, SearchableItem
from .projection import to_searchable
from .query_parser import QueryParser, has_search_criteria

DEFAULT_MAX_RESULTS = 50


def _searchable_fields(item: SearchableItem) -> List[str]:
	"""Every text field a term, phrase or exclusion may be found in."""
	fields = [item.title, item.content]
	if item.genres or item.tags:
		fields.append(" ".join(item.genres + item.tags))
	return [f for f in fields if f]


class ResultRanker:
	"""
	Scores items per query:
	- hard filters (type, field, comparators) decide eligibility
	- excluded terms and phrases are boolean requirements
	- free-text groups give the soft score: weakest AND-group, best OR-alternative
	"""

	def __init__(self, max_results: int = DEFAULT_MAX_RESULTS, parser: Optional[QueryParser] = None):
		self.max_results = max_results
		self.parser = parser or QueryParser()

	def rank(
		self,
		query: str,
		media_items: Iterable[Media] = (),
		note_items: Iterable[Note] = (),
		place_items: Iterable[Place] = (),
	) -> List[ScoredResult]:
		"""Return at most `max_results` results, best first; ties keep media/notes/places input order."""
		parsed = self.parser.parse(query)
		if not has_search_criteria(parsed):
			logger.debug("[Ranker] No search criteria, returning no results")
			return []

		results: List[ScoredResult] = []
		total = 0
		for collection in (media_items, note_items, place_items):
			for entity in collection:
				total += 1
				item = to_searchable(entity)
				score = self.score_item(item, parsed)
				if score > 0:
					results.append(ScoredResult(entity_type=item.entity_type, entity=entity, score=score))

		results.sort(key=lambda r: r.score, reverse=True)  # stable sort keeps insertion order on ties
		logger.debug(f"[Ranker] '{parsed.raw_query}' matched {len(results)} of {total} items")
		return results[: self.max_results]

	def score_entity(self, entity: Entity, parsed: ParsedQuery) -> int:
		"""Project an entity and score it; 0 means it is excluded."""
		return self.score_item(to_searchable(entity), parsed)

	def score_item(self, item: SearchableItem, parsed: ParsedQuery) -> int:
		if not passes_hard_filters(item, parsed):
			return 0

		fields = _searchable_fields(item)
		folded = [f.casefold() for f in fields]

		for term in parsed.excluded_terms:
			if any(term.casefold() in text for text in folded):
				logger.debug(f"[Ranker] Excluded {item.entity_type}:{item.id} by '{term}'")
				return 0

		# Phrases are literal substrings of title or content
		title_content = [item.title.casefold(), item.content.casefold()]
		for phrase in parsed.phrases:
			if not any(phrase.casefold() in text for text in title_content):
				return 0

		if not parsed.term_groups:
			return SCORE_EXACT  # pure filter match

		return self._groups_score(parsed.term_groups, fields)

	def _groups_score(self, groups: Sequence[Sequence[str]], fields: Sequence[str]) -> int:
		weakest = SCORE_EXACT
		for group in groups:
			best = max(fuzzy_score_multi(term, *fields) for term in group)
			if best == 0:
				return 0
			weakest = min(weakest, best)
		return weakest
