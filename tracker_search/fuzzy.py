"""
Fuzzy relevance scoring.
Scores how well a free-text term matches a single field value on a 0-100 scale.
"""

import math  # floor for integer scores
from typing import Callable, Iterable, List, Optional, Tuple, TypeVar

T = TypeVar("T")

# Characters after which a match counts as landing on a word boundary
WORD_BOUNDARIES = (" ", "-", ":")

SCORE_EXACT = 100
SCORE_PREFIX = 95
SCORE_SUBSTRING = 85
SCORE_SUBSEQUENCE_BASE = 60
SCORE_SUBSEQUENCE_MAX = 80
CONSECUTIVE_BONUS = 5
BOUNDARY_BONUS = 10
MAX_LENGTH_PENALTY = 20
PARTIAL_MATCH_WEIGHT = 30
PARTIAL_MATCH_MIN_RATIO = 0.5


def fuzzy_score(query: str, target: Optional[str]) -> int:
	"""
	Score `query` against `target`, case-insensitively.
	Exact 100, prefix 95, substring 85, in-order subsequence up to 80,
	partial subsequence (more than half of the query) under 30, otherwise 0.
	"""
	if not query or not query.strip():  # blank query matches everything
		return SCORE_EXACT
	if not target:
		return 0

	q = query.strip().casefold()  # stray box whitespace is not part of the term
	t = target.strip().casefold()

	if t == q:
		return SCORE_EXACT
	if t.startswith(q):
		return SCORE_PREFIX
	if q in t:
		return SCORE_SUBSTRING

	# Walk the target once, consuming query characters in order
	q_idx = 0
	bonus = 0
	last_match = -2
	for t_idx, ch in enumerate(t):
		if q_idx >= len(q):
			break
		if ch != q[q_idx]:
			continue
		if t_idx == last_match + 1:
			bonus += CONSECUTIVE_BONUS
		if t_idx == 0 or t[t_idx - 1] in WORD_BOUNDARIES:
			bonus += BOUNDARY_BONUS
		last_match = t_idx
		q_idx += 1

	if q_idx == len(q):
		penalty = min(MAX_LENGTH_PENALTY, (len(t) - len(q)) / 2)
		return int(math.floor(min(SCORE_SUBSEQUENCE_MAX, SCORE_SUBSEQUENCE_BASE + bonus - penalty)))

	if q_idx / len(q) > PARTIAL_MATCH_MIN_RATIO:
		return (PARTIAL_MATCH_WEIGHT * q_idx) // len(q)  # floor(30 * ratio) without float error
	return 0


def fuzzy_score_multi(query: str, *targets: Optional[str]) -> int:
	"""Best `fuzzy_score` across several (possibly missing) fields."""
	best = 0
	for target in targets:
		if target:
			best = max(best, fuzzy_score(query, target))
	return best


def fuzzy_filter(
	items: Iterable[T],
	query: str,
	get_text: Callable[[T], str],
	threshold: int = 20,
) -> List[Tuple[T, int]]:
	"""
	Score every item, keep those at or above `threshold`, best first.
	A blank query keeps everything at 100 in input order.
	"""
	if not query or not query.strip():
		return [(item, SCORE_EXACT) for item in items]

	scored = [(item, fuzzy_score(query, get_text(item))) for item in items]
	kept = [pair for pair in scored if pair[1] >= threshold]
	kept.sort(key=lambda pair: pair[1], reverse=True)  # stable, ties keep input order
	return kept
