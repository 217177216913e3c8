"""Unit tests for hard filter evaluation on projected items."""

from tracker_search.filters import passes_hard_filters
from tracker_search.models import SearchableItem
from tracker_search.query_parser import parse_query


def item(entity_type="movie", **kwargs):
	kwargs.setdefault("id", "x")
	kwargs.setdefault("title", "Something")
	return SearchableItem(entity_type=entity_type, **kwargs)


def passes(query, it):
	return passes_hard_filters(it, parse_query(query))


class TestTypeFilters:

	def test_no_type_filter_passes_everything(self):
		for t in ("movie", "tv", "game", "note", "place"):
			assert passes("batman", item(t))

	def test_type_filters_are_ored(self):
		assert passes("@movie @tv", item("tv"))
		assert passes("@movie @tv", item("movie"))
		assert not passes("@movie @tv", item("note"))


class TestFieldFilters:

	def test_status(self):
		assert passes("status:completed", item(status="completed"))
		assert not passes("status:completed", item(status="queued"))
		assert not passes("status:completed", item("note"))

	def test_year_equality_and_range(self):
		assert passes("year:2005", item(year=2005))
		assert not passes("year:2005", item(year=2006))
		assert passes("year>2000 year<2010", item(year=2005))
		assert not passes("year>2000 year<2010", item(year=2010))

	def test_comparators_fail_closed(self):
		assert passes("rating>4", item(rating=5))
		assert not passes("rating>4", item(rating=4))
		assert passes("rating>=4", item(rating=4))
		assert passes("rating<=4", item(rating=4))
		assert not passes("rating<4", item(rating=None))
		assert not passes("rating>4", item(rating=None))
		assert not passes("year<3000", item(year=None))

	def test_by_is_exact(self):
		assert passes("by:Z", item(created_by="Z"))
		assert not passes("by:Z", item(created_by="T"))
		assert not passes("by:Z", item(created_by=None))

	def test_visited_only_applies_to_places(self):
		assert passes("visited:yes", item("place", visited=True))
		assert passes("visited:no", item("place", visited=False))
		assert not passes("visited:no", item("place", visited=True))
		assert not passes("visited:no", item("movie"))
		assert not passes("visited:no", item("note"))

	def test_note_only_flags(self):
		assert passes("archived:yes", item("note", archived=True))
		assert not passes("archived:yes", item("note", archived=False))
		assert not passes("archived:no", item("place"))
		assert passes("is:unread", item("note", read=False))
		assert not passes("is:unread", item("note", read=True))
		assert not passes("is:unread", item("movie"))

	def test_genre_contains(self):
		assert passes("genre:fiction", item(genres=("Adventure", "Science Fiction")))
		assert not passes("genre:horror", item(genres=("Drama",)))
		assert not passes("genre:drama", item("place"))

	def test_all_filter_kinds_must_hold(self):
		it = item("movie", rating=5, status="completed", created_by="T")
		assert passes("@movie rating>4 status:done by:T", it)
		assert not passes("@movie rating>4 status:done by:Z", it)
		assert not passes("@tv rating>4 status:done by:T", it)
