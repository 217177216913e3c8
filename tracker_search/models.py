"""
Data models for the tracker search subsystem.
Defines the tracked entities (media, notes, places) and the structures that flow through search.
"""

# Import dataclass to define simple "record-like" classes without boilerplate
from dataclasses import dataclass, field  # auto-generates __init__, __repr__, etc.
# Import typing helpers for precise and self-documenting types
from typing import Dict, FrozenSet, List, Optional, Tuple, Union


USER_IDS: Tuple[str, ...] = ("Z", "T")  # the two fixed user identifiers
MEDIA_TYPES: Tuple[str, ...] = ("movie", "tv", "game")
ENTITY_TYPES: Tuple[str, ...] = MEDIA_TYPES + ("note", "place")  # canonical order, also used for display
MEDIA_STATUSES: Tuple[str, ...] = ("queued", "watching", "completed", "dropped")
PLACE_CATEGORIES: Tuple[str, ...] = ("restaurant", "cafe", "bar", "attraction", "park", "other")


@dataclass
class Media:
	"""
	A movie, TV show or game on the shared watch/play list.
	The legacy single `rating` is kept next to the per-user `ratings` map.
	"""
	id: str  # document id from the store
	media_type: str  # one of MEDIA_TYPES
	title: str  # display title
	created_by: Optional[str] = None  # "Z" or "T"
	status: str = "queued"  # one of MEDIA_STATUSES
	rating: Optional[float] = None  # legacy shared rating
	ratings: Optional[Dict[str, Optional[float]]] = None  # per-user ratings keyed by user id
	overview: str = ""  # synopsis from the catalogue
	notes: str = ""  # free-form notes written by the users
	release_date: Optional[str] = None  # ISO date string, e.g. "1999-03-31"
	genres: List[str] = field(default_factory=list)  # genre names as stored
	poster_path: Optional[str] = None  # optional poster path for the UI

	@property
	def display_rating(self) -> Optional[float]:
		"""Average of both user ratings, else whichever exists, else the legacy rating."""
		if self.ratings:
			present = [r for r in (self.ratings.get(u) for u in USER_IDS) if r is not None]
			if len(present) == len(USER_IDS):
				return sum(present) / len(present)
			if present:
				return present[0]
		return self.rating

	@property
	def release_year(self) -> Optional[int]:
		if not self.release_date:
			return None
		head = self.release_date.strip()[:4]
		return int(head) if head.isdigit() else None


@dataclass
class Note:
	"""A note or message left by one user for the other."""
	id: str
	title: str
	content: str = ""
	tags: List[str] = field(default_factory=list)
	created_by: Optional[str] = None
	read: bool = False
	archived: bool = False


@dataclass
class Place:
	"""A place to go (or already visited)."""
	id: str
	name: str
	category: str = "other"  # one of PLACE_CATEGORIES
	notes: str = ""
	visited: bool = False
	rating: Optional[float] = None
	created_by: Optional[str] = None


# Tagged union of every entity variant the search can project
Entity = Union[Media, Note, Place]


@dataclass(frozen=True)
class SearchableItem:
	"""
	Uniform projection of any entity variant.
	The filters and the scorer only ever look at this shape.
	"""
	id: str
	entity_type: str  # one of ENTITY_TYPES
	title: str  # never empty
	content: str = ""  # body, overview and notes
	status: Optional[str] = None
	rating: Optional[float] = None
	year: Optional[int] = None
	created_by: Optional[str] = None
	genres: Tuple[str, ...] = ()
	tags: Tuple[str, ...] = ()
	archived: Optional[bool] = None
	read: Optional[bool] = None
	visited: Optional[bool] = None


@dataclass(frozen=True)
class FieldFilter:
	"""One hard filter such as `status:completed` or `rating>=4`."""
	key: str  # canonical field name (status, year, rating, by, visited, genre, archived, unread)
	op: str  # one of "=", ">", "<", ">=", "<="
	value: Union[str, int, float, bool]


@dataclass(frozen=True)
class ParsedQuery:
	"""
	Structured form of a raw search string.
	Term groups are AND'ed together; the terms inside a group are alternatives (OR).
	"""
	raw_query: str  # the original text the user typed
	types: FrozenSet[str] = frozenset()  # empty means every entity type
	field_filters: Tuple[FieldFilter, ...] = ()
	phrases: Tuple[str, ...] = ()  # lowercased exact substrings
	term_groups: Tuple[Tuple[str, ...], ...] = ()
	excluded_terms: FrozenSet[str] = frozenset()


@dataclass(frozen=True)
class ScoredResult:
	entity_type: str  # entity type of the matched item
	entity: Entity  # the original record, untouched
	score: int  # 1..100 for anything the ranker returns


@dataclass(frozen=True)
class CollectionSnapshot:
	"""Immutable view of the three collections at one point in time."""
	media: Tuple[Media, ...] = ()
	notes: Tuple[Note, ...] = ()
	places: Tuple[Place, ...] = ()

	def __len__(self) -> int:
		return len(self.media) + len(self.notes) + len(self.places)
