"""
FastAPI server exposing the unified tracker search.
Endpoints:
- GET /health: basic health check
- GET /search?q=...: ranked results across media, notes and places, plus active filter chips

Startup loads the collections from the snapshot directory (TRACKER_DATA_DIR, default data/).
"""

# Import standard libraries for timing
import time  # measure startup and request latencies
from typing import List, Optional  # precise typing for clarity

# Import FastAPI for building the web API and Pydantic for response models
from fastapi import FastAPI, Query  # FastAPI primitives
from pydantic import BaseModel  # response schema definitions

# Import our internal modules for configuration, data loading and search
from tracker_search.config import Settings, setup_logging  # env-driven settings
from tracker_search.data_loader import DataLoader  # loads and normalizes collections
from tracker_search.models import CollectionSnapshot, Media, Note, Place, ScoredResult  # records
from tracker_search.projection import to_searchable  # uniform titles
from tracker_search.search_engine import SearchEngine  # core search engine

# Import loguru for simple, structured console logging
from loguru import logger  # convenient console logger

# Instantiate the FastAPI application with metadata
app = FastAPI(title="Tracker Search API", version="1.0.0")  # web app

# Globals that hold the search engine instance and measured startup time
ENGINE: Optional[SearchEngine] = None  # will point to the initialized engine
STARTUP_TIME_S: float = 0.0  # measures how long startup took

SNIPPET_LENGTH = 200  # characters of body text returned per result


# Pydantic model for a single ranked item, flattened across entity variants
class SearchResponseItem(BaseModel):
	entity_type: str  # movie, tv, game, note or place
	id: str  # id of the original record
	title: str  # display title
	score: int  # relevance 1..100
	snippet: Optional[str] = None  # start of the overview/content/notes
	status: Optional[str] = None  # media status
	rating: Optional[float] = None  # media or place rating
	year: Optional[int] = None  # media release year
	poster_path: Optional[str] = None  # media poster for poster rows
	created_by: Optional[str] = None  # "Z" or "T"


# Pydantic model for the complete search response payload
class SearchResponse(BaseModel):
	query: str  # original query string
	has_criteria: bool  # False means "nothing to search for", not "no matches"
	filters: List[str]  # active filter chips
	elapsed_ms: float  # server-side search time in ms
	results: List[SearchResponseItem]  # ranked items


def _snippet(text: str) -> Optional[str]:
	return text[:SNIPPET_LENGTH] if text else None


def to_response_item(result: ScoredResult) -> SearchResponseItem:
	"""Convert an engine result into the response schema for its entity variant."""
	entity = result.entity
	title = to_searchable(entity).title  # projected title, never empty
	if isinstance(entity, Media):
		return SearchResponseItem(
			entity_type=result.entity_type,
			id=entity.id,
			title=title,
			score=result.score,
			snippet=_snippet(entity.overview or entity.notes),
			status=entity.status,
			rating=entity.display_rating,
			year=entity.release_year,
			poster_path=entity.poster_path,
			created_by=entity.created_by,
		)
	if isinstance(entity, Note):
		return SearchResponseItem(
			entity_type=result.entity_type,
			id=entity.id,
			title=title,
			score=result.score,
			snippet=_snippet(entity.content),
			created_by=entity.created_by,
		)
	if isinstance(entity, Place):
		return SearchResponseItem(
			entity_type=result.entity_type,
			id=entity.id,
			title=title,
			score=result.score,
			snippet=_snippet(entity.notes),
			rating=entity.rating,
			created_by=entity.created_by,
		)
	raise TypeError(f"Unsupported entity variant: {type(entity).__name__}")


# FastAPI startup hook to initialize the search engine once
@app.on_event("startup")
async def startup_event():
	"""Load the snapshot and build the engine."""
	global ENGINE, STARTUP_TIME_S  # refer to module-level globals
	start = time.time()  # start timer for startup latency

	settings = Settings.from_env()  # read TRACKER_* variables
	setup_logging(settings.log_level)  # configure loguru sink
	logger.info(f"[API] Startup: loading snapshot from '{settings.data_dir}'...")  # log intent

	try:
		snapshot = DataLoader().load_snapshot(str(settings.data_dir))  # read collections
	except FileNotFoundError as e:
		logger.warning(f"[API] {e}; serving an empty snapshot")  # keep serving, nothing to find
		snapshot = CollectionSnapshot()

	ENGINE = SearchEngine(snapshot, max_results=settings.max_results)  # create engine

	STARTUP_TIME_S = time.time() - start  # elapsed seconds
	logger.info(f"[API] Startup complete in {STARTUP_TIME_S:.2f}s with {len(snapshot)} items.")  # summary log


# Simple health endpoint for readiness checks
@app.get("/health")
async def health():
	"""Return minimal health info for liveness/readiness probes."""
	return {
		"status": "ok",  # constant indicator
		"engine_ready": ENGINE is not None,  # True if engine initialized
		"items": len(ENGINE.snapshot) if ENGINE is not None else 0,  # searchable records
		"startup_seconds": round(STARTUP_TIME_S, 2)  # startup latency
	}


# Main search endpoint that accepts the compact query syntax
@app.get("/search", response_model=SearchResponse)
async def search(q: str = Query("", description="Search query, e.g. '@movie rating>4 batman'")):
	"""Execute a unified search and return ranked results with filter chips."""
	if ENGINE is None:  # engine must be ready to serve
		logger.warning("[API] Search requested but engine not initialized")  # guard log
		return SearchResponse(query=q, has_criteria=False, filters=[], elapsed_ms=0.0, results=[])  # return empty

	# Time the search for latency insight
	start = time.time()  # start timer
	logger.debug(f"[API] /search q='{q}'")  # debug log of input

	results = ENGINE.search(q)  # run search
	elapsed_ms = (time.time() - start) * 1000  # compute ms
	logger.info(f"[API] /search served {len(results)} results in {elapsed_ms:.2f} ms")  # summary

	return SearchResponse(
		query=q,
		has_criteria=ENGINE.has_criteria(q),
		filters=ENGINE.filter_summary(q),
		elapsed_ms=round(elapsed_ms, 2),
		results=[to_response_item(r) for r in results],
	)
