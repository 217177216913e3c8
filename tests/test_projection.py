"""Unit tests for projecting media, notes and places into SearchableItem."""

import pytest

from tracker_search.models import Media, Note, Place
from tracker_search.projection import PROJECTORS, to_searchable

from helpers import game, movie, note, place, show


def test_every_entity_variant_has_a_projector():
	assert set(PROJECTORS) == {Media, Note, Place}


def test_unknown_variant_is_rejected():
	with pytest.raises(TypeError):
		to_searchable({"title": "dict is not an entity"})


def test_media_projection():
	m = movie("m1", "Batman Begins", created_by="Z", status="completed", ratings={"Z": 5, "T": 4},
		overview="Gotham needs a hero.", notes="rewatch", release_date="2005-06-10", genres=["Action"])
	it = to_searchable(m)
	assert it.entity_type == "movie"
	assert it.title == "Batman Begins"
	assert it.content == "Gotham needs a hero. rewatch"
	assert it.rating == 4.5
	assert it.year == 2005
	assert it.status == "completed"
	assert it.created_by == "Z"
	assert it.genres == ("Action",)
	assert to_searchable(show("s", "Show")).entity_type == "tv"
	assert to_searchable(game("g", "Game")).entity_type == "game"


def test_media_rating_fallbacks():
	assert to_searchable(movie("a", "A", ratings={"Z": None, "T": 3})).rating == 3
	assert to_searchable(movie("b", "B", rating=2, ratings={"Z": None})).rating == 2
	assert to_searchable(movie("c", "C", rating=None)).rating is None


def test_media_year_needs_a_date():
	assert to_searchable(movie("a", "A")).year is None
	assert to_searchable(movie("b", "B", release_date="unknown")).year is None


def test_note_projection():
	it = to_searchable(note("n1", "Movie night", "watch star wars", tags=["plans"], read=True, created_by="T"))
	assert it.entity_type == "note"
	assert it.content == "watch star wars"
	assert it.tags == ("plans",)
	assert it.read is True
	assert it.archived is False
	assert it.rating is None


def test_untitled_note_borrows_content():
	assert to_searchable(note("n", "  ", "first line\nsecond line")).title == "first line"
	assert to_searchable(note("n", "", "")).title == "Untitled"


def test_place_projection():
	it = to_searchable(place("p1", "Blue Bottle", category="cafe", notes="pour over", visited=True, rating=4))
	assert it.entity_type == "place"
	assert it.title == "Blue Bottle"
	assert it.content == "pour over"
	assert it.tags == ("cafe",)
	assert it.visited is True
	assert it.rating == 4
