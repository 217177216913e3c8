"""Runtime settings and logging setup."""

import os
import sys
from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from .ranking import DEFAULT_MAX_RESULTS

DEFAULT_DATA_DIR = Path("data")
DEFAULT_API_URL = "http://localhost:8000"


@dataclass
class Settings:
	"""Settings shared by the API, the UI and scripts."""
	data_dir: Path = DEFAULT_DATA_DIR  # directory holding media/notes/places .jsonl files
	log_level: str = "INFO"
	max_results: int = DEFAULT_MAX_RESULTS
	api_url: str = DEFAULT_API_URL

	@classmethod
	def from_env(cls) -> "Settings":
		"""Read TRACKER_* environment variables, falling back to defaults."""
		max_results = os.environ.get("TRACKER_MAX_RESULTS")
		return cls(
			data_dir=Path(os.environ.get("TRACKER_DATA_DIR", str(DEFAULT_DATA_DIR))),
			log_level=os.environ.get("TRACKER_LOG_LEVEL", "INFO").upper(),
			max_results=int(max_results) if max_results and max_results.isdigit() else DEFAULT_MAX_RESULTS,
			api_url=os.environ.get("TRACKER_API_URL", DEFAULT_API_URL),
		)


def setup_logging(level: str = "INFO") -> None:
	"""Replace loguru's default sink with a stderr sink at `level`."""
	logger.remove()
	logger.add(sys.stderr, level=level.upper())
	logger.debug(f"[Config] Logging configured at {level.upper()}")
