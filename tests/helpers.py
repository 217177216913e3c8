"""Factories for small in-memory collections used across the tests."""

from tracker_search.models import CollectionSnapshot, Media, Note, Place


def movie(id, title, rating=None, **kwargs):
	return Media(id=id, media_type="movie", title=title, rating=rating, **kwargs)


def show(id, title, rating=None, **kwargs):
	return Media(id=id, media_type="tv", title=title, rating=rating, **kwargs)


def game(id, title, rating=None, **kwargs):
	return Media(id=id, media_type="game", title=title, rating=rating, **kwargs)


def note(id, title, content="", **kwargs):
	return Note(id=id, title=title, content=content, **kwargs)


def place(id, name, **kwargs):
	return Place(id=id, name=name, **kwargs)


def sample_snapshot():
	"""A few records of every kind, mirroring data/ in spirit."""
	media = (
		movie("m1", "Batman Begins", created_by="Z", status="completed", ratings={"Z": 5, "T": 4},
			overview="Batman begins his fight to free Gotham City.", release_date="2005-06-10",
			genres=["Action", "Crime"]),
		movie("m2", "Star Wars", rating=5, created_by="T", status="completed",
			overview="Princess Leia is held hostage.", release_date="1977-05-25",
			genres=["Adventure", "Science Fiction"]),
		show("m3", "Breaking Bad", created_by="Z", status="watching", ratings={"Z": 5, "T": None},
			release_date="2008-01-20", genres=["Drama", "Crime"]),
		game("m4", "Hades", created_by="T", release_date="2020-09-17", genres=["Action", "Roguelike"]),
	)
	notes = (
		note("n1", "Movie night", "Let's finally watch star wars this weekend", tags=["plans"], created_by="Z", read=True),
		note("n2", "Groceries", "eggs, milk, coffee beans", tags=["shopping"], created_by="T"),
		note("n3", "", "Remember the batman ending?", created_by="Z", archived=True),
	)
	places = (
		place("p1", "Blue Bottle Coffee", category="cafe", notes="great pour over", visited=True, rating=4, created_by="T"),
		place("p2", "Gotham Diner", category="restaurant", notes="batman themed burgers", created_by="Z"),
	)
	return CollectionSnapshot(media=media, notes=notes, places=places)
