"""
Hard filter evaluation.
An item must satisfy every type and field filter of a ParsedQuery before it is scored at all.
"""

import operator  # comparator functions
from typing import Callable, Dict, Optional, Union

from .models import FieldFilter, ParsedQuery, SearchableItem

Number = Union[int, float]

COMPARATORS: Dict[str, Callable[[Number, Number], bool]] = {
	"=": operator.eq,
	">": operator.gt,
	"<": operator.lt,
	">=": operator.ge,
	"<=": operator.le,
}

# Filters that only make sense for one entity type; any other type fails them
TYPE_SCOPED_KEYS: Dict[str, str] = {
	"visited": "place",
	"archived": "note",
	"unread": "note",
}


def _compare(actual: Optional[Number], op: str, expected: Number) -> bool:
	if actual is None:  # missing values never satisfy a comparison
		return False
	return COMPARATORS[op](actual, expected)


def passes_field_filter(item: SearchableItem, flt: FieldFilter) -> bool:
	"""Evaluate a single field filter against an item."""
	scope = TYPE_SCOPED_KEYS.get(flt.key)
	if scope is not None and item.entity_type != scope:
		return False

	if flt.key == "status":
		return item.status is not None and item.status == flt.value
	if flt.key == "year":
		return _compare(item.year, flt.op, flt.value)
	if flt.key == "rating":
		return _compare(item.rating, flt.op, flt.value)
	if flt.key == "by":
		return item.created_by == flt.value
	if flt.key == "visited":
		return bool(item.visited) == flt.value
	if flt.key == "archived":
		return bool(item.archived) == flt.value
	if flt.key == "unread":
		return not item.read
	if flt.key == "genre":
		needle = str(flt.value).casefold()
		return any(needle in g.casefold() for g in item.genres)
	# Unknown keys cannot be produced by the parser; treat them as unsatisfiable
	return False


def passes_hard_filters(item: SearchableItem, parsed: ParsedQuery) -> bool:
	"""
	True when the item matches at least one requested type (if any)
	and every field filter.
	"""
	if parsed.types and item.entity_type not in parsed.types:
		return False
	return all(passes_field_filter(item, flt) for flt in parsed.field_filters)
