"""
Data loading and preprocessing module.
Loads media, notes and places from JSON Lines exports of the document store and normalizes them.
"""

# Standard libs for JSON parsing, typing, and paths
import json  # read JSON lines
from typing import Any, Callable, Dict, List, Optional, TypeVar  # type hints
from pathlib import Path  # filesystem-safe paths

# Import the entity records used across the project
from .models import (
	MEDIA_STATUSES,
	MEDIA_TYPES,
	PLACE_CATEGORIES,
	USER_IDS,
	CollectionSnapshot,
	Media,
	Note,
	Place,
)

# Console logging
from loguru import logger  # console logger

T = TypeVar("T")


class DataLoader:
	"""
	Handles loading and preprocessing of the three tracked collections.
	Field names are accepted in the store's camelCase or in snake_case.
	"""

	MEDIA_FILE = "media.jsonl"
	NOTES_FILE = "notes.jsonl"
	PLACES_FILE = "places.jsonl"

	TRUE_VALUES = {"true", "yes", "1"}  # string forms accepted as True

	def load_snapshot(self, directory: str) -> CollectionSnapshot:
		"""
		Load all three collections from `directory`.
		A missing directory is an error; a missing collection file is an empty collection.
		"""
		base = Path(directory)  # normalize path
		if not base.is_dir():
			raise FileNotFoundError(f"Snapshot directory not found: {base}")

		media = self._load_optional(base / self.MEDIA_FILE, self.load_media_from_jsonl)
		notes = self._load_optional(base / self.NOTES_FILE, self.load_notes_from_jsonl)
		places = self._load_optional(base / self.PLACES_FILE, self.load_places_from_jsonl)

		snapshot = CollectionSnapshot(media=tuple(media), notes=tuple(notes), places=tuple(places))
		logger.info(
			f"[DataLoader] Snapshot ready from {base}: {len(media)} media, {len(notes)} notes, {len(places)} places"
		)
		return snapshot

	def load_media_from_jsonl(self, filepath: str) -> List[Media]:
		return self._read_jsonl(filepath, self._parse_media, "media")

	def load_notes_from_jsonl(self, filepath: str) -> List[Note]:
		return self._read_jsonl(filepath, self._parse_note, "note")

	def load_places_from_jsonl(self, filepath: str) -> List[Place]:
		return self._read_jsonl(filepath, self._parse_place, "place")

	def _load_optional(self, filepath: Path, load: Callable[[str], List[T]]) -> List[T]:
		if not filepath.exists():
			logger.info(f"[DataLoader] {filepath.name} not present, using an empty collection")
			return []
		return load(str(filepath))

	def _read_jsonl(self, filepath: str, parse: Callable[[Dict[str, Any]], T], label: str) -> List[T]:
		"""
		Read one record per line, skipping lines that are not valid JSON
		or that fail validation.
		"""
		records: List[T] = []  # accumulator for parsed records
		filepath = Path(filepath)  # normalize path

		# Validate the file presence early to give clear error messages
		if not filepath.exists():
			raise FileNotFoundError(f"{label.title()} data file not found: {filepath}")

		logger.info(f"[DataLoader] Loading {label} records from {filepath}...")  # log action

		with open(filepath, 'r', encoding='utf-8') as f:
			for line_num, line in enumerate(f, 1):  # keep track of line number for diagnostics
				if not line.strip():  # tolerate blank lines
					continue
				try:
					data = json.loads(line)  # parse JSON object per line
					if not isinstance(data, dict):
						raise ValueError("record is not a JSON object")
					records.append(parse(data))  # convert dict -> entity
				except json.JSONDecodeError as e:
					logger.warning(f"[DataLoader] Skipping invalid JSON at line {line_num}: {e}")  # malformed line
				except (ValueError, TypeError) as e:
					logger.warning(f"[DataLoader] Skipping invalid {label} at line {line_num}: {e}")  # bad record

		logger.info(f"[DataLoader] Successfully loaded {len(records)} {label} records.")  # summary
		return records

	def _parse_media(self, data: Dict[str, Any]) -> Media:
		"""Convert a raw media document into a Media record."""
		media_type = str(data.get('type') or data.get('media_type') or '').strip().lower()
		if media_type not in MEDIA_TYPES:
			raise ValueError(f"unknown media type {media_type!r}")

		status = str(data.get('status') or 'queued').strip().lower()
		if status not in MEDIA_STATUSES:
			raise ValueError(f"unknown media status {status!r}")

		# Per-user ratings only keep known user ids
		raw_ratings = data.get('ratings')
		ratings = None
		if isinstance(raw_ratings, dict):
			ratings = {u: self._parse_number(raw_ratings.get(u)) for u in USER_IDS if u in raw_ratings}

		return Media(
			id=self._require_id(data),
			media_type=media_type,
			title=self._require_text(data, 'title'),
			created_by=self._parse_user(data.get('createdBy', data.get('created_by'))),
			status=status,
			rating=self._parse_number(data.get('rating')),
			ratings=ratings,
			overview=self._text(data.get('overview')),
			notes=self._text(data.get('notes')),
			release_date=self._text(data.get('releaseDate', data.get('release_date'))) or None,
			genres=self._parse_comma_separated(data.get('genres')),
			poster_path=self._text(data.get('posterPath', data.get('poster_path'))) or None,
		)

	def _parse_note(self, data: Dict[str, Any]) -> Note:
		return Note(
			id=self._require_id(data),
			title=self._text(data.get('title')),  # untitled notes are allowed
			content=self._text(data.get('content')),
			tags=self._parse_comma_separated(data.get('tags')),
			created_by=self._parse_user(data.get('createdBy', data.get('created_by'))),
			read=self._parse_bool(data.get('read')),
			archived=self._parse_bool(data.get('archived')),
		)

	def _parse_place(self, data: Dict[str, Any]) -> Place:
		category = str(data.get('category') or 'other').strip().lower()
		if category not in PLACE_CATEGORIES:
			logger.debug(f"[DataLoader] Unknown place category {category!r}, using 'other'")
			category = 'other'
		return Place(
			id=self._require_id(data),
			name=self._require_text(data, 'name'),
			category=category,
			notes=self._text(data.get('notes')),
			visited=self._parse_bool(data.get('visited')),
			rating=self._parse_number(data.get('rating')),
			created_by=self._parse_user(data.get('createdBy', data.get('created_by'))),
		)

	def _require_id(self, data: Dict[str, Any]) -> str:
		value = data.get('id')
		if value is None or not str(value).strip():
			raise ValueError("missing id")
		return str(value).strip()  # ensure ID is string

	def _require_text(self, data: Dict[str, Any], key: str) -> str:
		value = self._text(data.get(key))
		if not value:
			raise ValueError(f"missing {key}")
		return value

	def _text(self, value: Any) -> str:
		"""Trim strings; None becomes an empty string."""
		if value is None:
			return ''
		return str(value).strip()

	def _parse_comma_separated(self, value: Any) -> List[str]:
		"""
		Normalize a value that may be None, a list, or a comma-separated string
		into a list of clean strings.
		"""
		if value is None:  # missing field
			return []  # treat as empty list
		if isinstance(value, list):  # already a list
			return [str(item).strip() for item in value if item]  # clean each
		if isinstance(value, str):  # comma-separated string
			return [item.strip() for item in value.split(',') if item.strip()]  # split/trim
		return []  # any other type becomes empty

	def _parse_number(self, value: Any) -> Optional[float]:
		# bool is an int subclass but never a rating
		if value is None or value == '' or isinstance(value, bool):
			return None
		return float(value)

	def _parse_bool(self, value: Any) -> bool:
		if isinstance(value, str):
			return value.strip().lower() in self.TRUE_VALUES
		return bool(value)

	def _parse_user(self, value: Any) -> Optional[str]:
		if value is None:
			return None
		user = str(value).strip().upper()
		return user if user in USER_IDS else None
