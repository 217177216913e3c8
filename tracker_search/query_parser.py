"""
Query parsing module.
Turns the compact search syntax (type tags, field filters, comparators, phrases, OR/NOT) into a ParsedQuery.
Malformed syntax never raises: anything that cannot be understood is kept as a literal search term.
"""

import math  # reject nan/inf comparator values
import re  # regex for tokens, fields and comparators
from typing import Dict, List, Optional, Tuple, Union

from loguru import logger  # console logging

from .models import ENTITY_TYPES, MEDIA_TYPES, USER_IDS, FieldFilter, ParsedQuery


# Token kinds produced by the first pass
_TERM = "term"
_PHRASE = "phrase"
_TYPES = "types"
_FILTER = "filter"
_EXCLUDE = "exclude"
_OR = "or"

Token = Tuple[str, object]

# Keys whose filters are rendered as chips, in display label form
FIELD_LABELS: Dict[str, str] = {
	"status": "Status",
	"year": "Year",
	"rating": "Rating",
	"by": "By",
	"visited": "Visited",
	"genre": "Genre",
	"archived": "Archived",
	"unread": "Unread",
}


class QueryParser:
	"""
	Parses raw search strings into an immutable ParsedQuery.
	The parser is stateless; one instance can serve any number of queries.
	"""

	# Balanced quoted span, or any other whitespace-delimited run
	RE_TOKEN = re.compile(r'"([^"]+)"|(\S+)')
	RE_FIELD = re.compile(r"^(?P<key>[A-Za-z]+):(?P<value>.+)$")  # status:completed
	RE_COMPARATOR = re.compile(r"^(?P<key>[A-Za-z]+)(?P<op>>=|<=|>|<)(?P<value>.+)$")  # rating>=4
	RE_INTEGER = re.compile(r"^[+-]?\d+$")

	OR_KEYWORD = "OR"
	NOT_KEYWORD = "NOT"
	NUMERIC_FIELDS = ("rating", "year")

	TYPE_ALIASES: Dict[str, Tuple[str, ...]] = {
		"movie": ("movie",), "movies": ("movie",), "film": ("movie",), "films": ("movie",),
		"tv": ("tv",), "show": ("tv",), "shows": ("tv",), "series": ("tv",),
		"game": ("game",), "games": ("game",),
		"note": ("note",), "notes": ("note",), "message": ("note",), "messages": ("note",),
		"place": ("place",), "places": ("place",), "location": ("place",), "locations": ("place",),
		"media": MEDIA_TYPES,
	}

	STATUS_ALIASES: Dict[str, str] = {
		"queued": "queued",
		"queue": "queued",
		"watching": "watching",
		"playing": "watching",
		"in-progress": "watching",
		"inprogress": "watching",
		"completed": "completed",
		"done": "completed",
		"finished": "completed",
		"dropped": "dropped",
		"abandoned": "dropped",
	}

	BOOLEAN_VALUES: Dict[str, bool] = {"yes": True, "true": True, "no": False, "false": False}

	def parse(self, query: str) -> ParsedQuery:
		"""Main entry: produce a ParsedQuery from a raw string."""
		raw = query or ""
		tokens = self._tokenize(raw)
		logger.debug(f"[Parser] Input query: '{raw}' -> {len(tokens)} tokens")

		types: List[str] = []
		filters: Dict[Tuple[str, str], FieldFilter] = {}  # (key, op) -> filter, last one wins
		phrases: List[str] = []
		excluded: List[str] = []
		groups: List[List[str]] = []

		prev_was_term = False  # whether the previous token opened/extended a term group
		i = 0
		while i < len(tokens):
			kind, value = tokens[i]

			if kind == _OR:
				nxt = tokens[i + 1] if i + 1 < len(tokens) else None
				if prev_was_term and nxt is not None and nxt[0] == _TERM:
					if nxt[1] not in groups[-1]:
						groups[-1].append(nxt[1])
					logger.debug(f"[Parser] OR joined '{nxt[1]}' into group {groups[-1]}")
					i += 2
					continue
				# Dangling OR is just the word "or"
				kind, value = _TERM, str(value).lower()

			if kind == _TERM:
				groups.append([value])
				prev_was_term = True
				i += 1
				continue

			prev_was_term = False
			if kind == _PHRASE:
				if value not in phrases:
					phrases.append(value)
			elif kind == _TYPES:
				for t in value:
					if t not in types:
						types.append(t)
			elif kind == _FILTER:
				key = (value.key, value.op)
				filters.pop(key, None)  # re-insert so the latest occurrence keeps its position
				filters[key] = value
			elif kind == _EXCLUDE:
				if value not in excluded:
					excluded.append(value)
			i += 1

		parsed = ParsedQuery(
			raw_query=raw,
			types=frozenset(types),
			field_filters=tuple(filters.values()),
			phrases=tuple(phrases),
			term_groups=tuple(tuple(g) for g in groups),
			excluded_terms=frozenset(excluded),
		)
		logger.debug(
			f"[Parser] Parsed result | types={sorted(parsed.types)} | filters={len(parsed.field_filters)} "
			f"| phrases={list(parsed.phrases)} | groups={[list(g) for g in parsed.term_groups]} "
			f"| excluded={sorted(parsed.excluded_terms)}"
		)
		return parsed

	def _tokenize(self, raw: str) -> List[Token]:
		"""Split into classified tokens; `NOT <word>` is folded into one exclusion token here."""
		pieces: List[Tuple[bool, str]] = []  # (is_phrase, text)
		for m in self.RE_TOKEN.finditer(raw):
			if m.group(1) is not None:
				pieces.append((True, m.group(1)))
			else:
				pieces.append((False, m.group(2)))

		tokens: List[Token] = []
		i = 0
		while i < len(pieces):
			is_phrase, text = pieces[i]
			if is_phrase:
				tokens.append((_PHRASE, text.lower()))
			elif text == self.NOT_KEYWORD and i + 1 < len(pieces):
				tokens.append((_EXCLUDE, pieces[i + 1][1].lower()))
				logger.debug(f"[Parser] NOT excludes '{pieces[i + 1][1]}'")
				i += 2
				continue
			else:
				tokens.append(self._classify(text))
			i += 1
		return tokens

	def _classify(self, text: str) -> Token:
		if text == self.OR_KEYWORD:
			return (_OR, text)

		if text.startswith("-") and len(text) > 1:
			return (_EXCLUDE, text[1:].lower())

		if text.startswith("@") and len(text) > 1:
			types = self.TYPE_ALIASES.get(text[1:].lower())
			if types:
				return (_TYPES, types)
			logger.debug(f"[Parser] Unknown type tag '{text}', keeping as text")
			return (_TERM, text.lower())

		m = self.RE_COMPARATOR.match(text)
		if m:
			flt = self._comparator_filter(m.group("key").lower(), m.group("op"), m.group("value"))
			if flt is not None:
				return (_FILTER, flt)
			logger.debug(f"[Parser] Malformed comparator '{text}', keeping as text")
			return (_TERM, text.lower())

		m = self.RE_FIELD.match(text)
		if m:
			resolved = self._field_filter(m.group("key").lower(), m.group("value"))
			if resolved is not None:
				return resolved
			logger.debug(f"[Parser] Unrecognized field token '{text}', keeping as text")
			return (_TERM, text.lower())

		return (_TERM, text.lower())

	def _comparator_filter(self, key: str, op: str, value: str) -> Optional[FieldFilter]:
		if key not in self.NUMERIC_FIELDS:
			return None
		number = self._number(key, value)
		if number is None:
			return None
		return FieldFilter(key=key, op=op, value=number)

	def _field_filter(self, key: str, value: str) -> Optional[Token]:
		"""Resolve `key:value`; None means the token is not a usable filter."""
		if key == "type":
			types = self.TYPE_ALIASES.get(value.lower())
			return (_TYPES, types) if types else None

		if key == "status":
			status = self.STATUS_ALIASES.get(value.lower())
			return (_FILTER, FieldFilter("status", "=", status)) if status else None

		if key in self.NUMERIC_FIELDS:
			number = self._number(key, value)
			return (_FILTER, FieldFilter(key, "=", number)) if number is not None else None

		if key in ("by", "from"):
			# User ids are matched exactly: "by:z" is not a user
			return (_FILTER, FieldFilter("by", "=", value)) if value in USER_IDS else None

		if key in ("visited", "archived"):
			flag = self.BOOLEAN_VALUES.get(value.lower())
			return (_FILTER, FieldFilter(key, "=", flag)) if flag is not None else None

		if key == "genre":
			return (_FILTER, FieldFilter("genre", "=", value.lower()))

		if key == "is" and value.lower() == "unread":
			return (_FILTER, FieldFilter("unread", "=", True))

		return None

	def _number(self, key: str, value: str) -> Optional[Union[int, float]]:
		if key == "year":
			return int(value) if self.RE_INTEGER.match(value) else None
		try:
			number = float(value)
		except ValueError:
			return None
		if math.isnan(number) or math.isinf(number):
			return None
		return number


_DEFAULT_PARSER = QueryParser()


def parse_query(raw: str) -> ParsedQuery:
	"""Parse with the shared stateless parser."""
	return _DEFAULT_PARSER.parse(raw)


def has_search_criteria(parsed: ParsedQuery) -> bool:
	"""True when the query restricts or scores anything (exclusions alone do not count)."""
	return bool(parsed.types or parsed.field_filters or parsed.phrases or parsed.term_groups)


def _format_value(value: Union[str, int, float, bool]) -> str:
	if isinstance(value, bool):
		return "yes" if value else "no"
	if isinstance(value, float):
		return f"{value:g}"
	return str(value)


def get_filter_summary(parsed: ParsedQuery) -> List[str]:
	"""Chip labels for the active hard filters: types, then field filters, then phrases."""
	labels: List[str] = []
	if parsed.types:
		ordered = [t for t in ENTITY_TYPES if t in parsed.types]
		labels.append(f"Type: {', '.join(ordered)}")
	for flt in parsed.field_filters:
		label = FIELD_LABELS.get(flt.key, flt.key.title())
		if flt.key == "unread":
			labels.append(label)
		elif flt.op == "=":
			labels.append(f"{label}: {_format_value(flt.value)}")
		else:
			labels.append(f"{label} {flt.op} {_format_value(flt.value)}")
	for phrase in parsed.phrases:
		labels.append(f'"{phrase}"')
	return labels
