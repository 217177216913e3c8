"""
Projection of entity variants into SearchableItem.
Each variant has its own mapper; unknown variants are rejected.
"""

from typing import Callable, Dict, Type

from .models import Entity, Media, Note, Place, SearchableItem

UNTITLED = "Untitled"  # title used when a record has none
NOTE_TITLE_MAX = 60  # characters of content borrowed as a note title


def _join_text(*parts: str) -> str:
	"""Join non-empty text parts with a single space."""
	return " ".join(p.strip() for p in parts if p and p.strip())


def project_media(media: Media) -> SearchableItem:
	return SearchableItem(
		id=media.id,
		entity_type=media.media_type,
		title=media.title.strip() or UNTITLED,
		content=_join_text(media.overview, media.notes),
		status=media.status,
		rating=media.display_rating,
		year=media.release_year,
		created_by=media.created_by,
		genres=tuple(media.genres),
	)


def project_note(note: Note) -> SearchableItem:
	# Untitled notes borrow the first line of their content
	title = note.title.strip()
	if not title:
		first_line = note.content.strip().splitlines()[0] if note.content.strip() else ""
		title = first_line[:NOTE_TITLE_MAX].strip() or UNTITLED
	return SearchableItem(
		id=note.id,
		entity_type="note",
		title=title,
		content=note.content,
		created_by=note.created_by,
		tags=tuple(note.tags),
		archived=note.archived,
		read=note.read,
	)


def project_place(place: Place) -> SearchableItem:
	return SearchableItem(
		id=place.id,
		entity_type="place",
		title=place.name.strip() or UNTITLED,
		content=place.notes,
		rating=place.rating,
		created_by=place.created_by,
		tags=(place.category,) if place.category else (),
		visited=place.visited,
	)


# One mapper per variant of Entity; adding a variant means adding an entry here
PROJECTORS: Dict[Type, Callable[..., SearchableItem]] = {
	Media: project_media,
	Note: project_note,
	Place: project_place,
}


def to_searchable(entity: Entity) -> SearchableItem:
	"""Project any entity variant into the uniform SearchableItem shape."""
	projector = PROJECTORS.get(type(entity))
	if projector is None:
		raise TypeError(f"Unsupported entity variant: {type(entity).__name__}")
	return projector(entity)
