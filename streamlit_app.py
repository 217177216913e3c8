"""
Streamlit UI for the tracker search.
Calls the local FastAPI server (TRACKER_API_URL, default http://localhost:8000) to fetch search results,
or runs locally by loading the snapshot directory like the API does.

Run API (optional):   uvicorn api:app --reload
Run UI:                streamlit run streamlit_app.py
"""

# HTTP client to call the API when running in API mode
import requests  # make web requests to the FastAPI server
# Streamlit framework to build a simple interactive UI
import streamlit as st  # UI primitives
# Typing to make function signatures clearer
from typing import Optional  # indicates values can be None

# Local engine imports for fallback/local mode (when API isn't used)
from api import to_response_item  # same result shape as the API
from tracker_search.config import Settings  # env-driven defaults
from tracker_search.data_loader import DataLoader  # load collections from files
from tracker_search.search_engine import SearchEngine  # run parsing + filtering + ranking

SETTINGS = Settings.from_env()  # defaults for data dir and API URL

# Buttons that prepend a type tag to the query text
QUICK_FILTERS = [("Movies", "@movie "), ("TV", "@tv "), ("Games", "@game "), ("Notes", "@note "), ("Places", "@place ")]

# Configure Streamlit page (title and layout width)
st.set_page_config(page_title="Tracker Search", layout="wide")  # wide layout

# Main page title
st.title("Search everything")  # friendly header

# Cache the local engine so we only load the snapshot once per session
@st.cache_resource(show_spinner=True)
def init_local_engine(data_dir: str) -> Optional[SearchEngine]:
	"""Create a local SearchEngine over the snapshot in `data_dir`."""
	try:
		snapshot = DataLoader().load_snapshot(data_dir)  # read collections
		return SearchEngine(snapshot, max_results=SETTINGS.max_results)  # success
	except (FileNotFoundError, OSError) as e:
		# Show an error in the UI so users know local mode failed
		st.error(f"Failed to initialize local search engine: {e}")
		return None  # signal failure


def prepend_filter(prefix: str) -> None:
	"""Button callback: put a type tag in front of the current query text."""
	current = st.session_state.get("query", "")
	if not current.startswith(prefix):
		st.session_state["query"] = prefix + current


# Sidebar contains configuration controls
with st.sidebar:
	st.header("Settings")  # section label
	api_url = st.text_input("API URL", SETTINGS.api_url)  # where the API lives
	data_dir = st.text_input("Data directory", str(SETTINGS.data_dir))  # local mode snapshot
	# Toggle to force local mode; if API health probe fails we also fall back to local
	use_local = st.toggle("Use local engine", value=False, help="If enabled or API is unreachable, the app will run fully locally.")

# If not forcing local, check quickly whether the API is reachable
api_available = False  # default assumption
if not use_local:
	try:
		h = requests.get(f"{api_url}/health", timeout=3)  # ping API health endpoint
		api_available = h.ok  # True if server responded 200 OK
	except requests.RequestException:
		api_available = False  # probe failed
		st.sidebar.info("API not reachable; will use local engine.")  # inform user

# Initialize local engine only when needed (user toggle or API not available)
local_engine: Optional[SearchEngine] = None  # placeholder
if use_local or not api_available:
	with st.spinner("Loading local snapshot..."):
		local_engine = init_local_engine(data_dir)  # build engine
		if local_engine is not None:
			st.sidebar.success("Local engine ready.")  # success note
		else:
			st.sidebar.error("Local engine failed to initialize.")  # error note

# Quick filter buttons above the query box
cols = st.columns(len(QUICK_FILTERS))
for col, (label, prefix) in zip(cols, QUICK_FILTERS):
	with col:
		st.button(label, on_click=prepend_filter, args=(prefix,), use_container_width=True)

# Main text input; Streamlit reruns on every change
query = st.text_input("Search", key="query", placeholder='e.g. @movie rating>4 "star wars" -spoiler')
st.caption("Syntax: @type, status:completed, year>2015, rating>=4, by:Z, visited:yes, \"exact phrase\", a OR b, -word")

if query.strip():
	try:
		if local_engine is not None:
			# Local mode: run the full pipeline inside this process
			results = local_engine.search(query)
			payload = {
				"has_criteria": local_engine.has_criteria(query),
				"filters": local_engine.filter_summary(query),
				"results": [to_response_item(r).model_dump() for r in results],
			}
		else:
			# API mode: call the server and let it perform the search
			resp = requests.get(f"{api_url}/search", params={"q": query}, timeout=10)
			resp.raise_for_status()  # raise error if server responded with an error code
			payload = resp.json()  # parse JSON returned by API

		# Active filter chips
		if payload.get("filters"):
			st.write(" ".join(f"`{chip}`" for chip in payload["filters"]))

		items = payload.get("results", [])
		if not payload.get("has_criteria"):
			st.info("Add a search term or a filter to search.")
		elif not items:
			st.warning("Nothing matched.")
		else:
			st.success(f"Found {len(items)} results")
			st.divider()  # visual separator

		# Render each result as a row; media with a poster get an image column
		for item in items:
			c1, c2 = st.columns([1, 6])
			with c1:
				if item.get("poster_path"):
					st.image(f"https://image.tmdb.org/t/p/w185{item['poster_path']}", width=80)  # poster
				else:
					st.write(item["entity_type"])  # type label for list rows
			with c2:
				year = f" ({item['year']})" if item.get("year") else ""
				st.subheader(f"{item['title']}{year}")
				meta = [f"score {item['score']}"]
				if item.get("status"):
					meta.append(item["status"])
				if item.get("rating") is not None:
					meta.append(f"rating {item['rating']:g}")
				if item.get("created_by"):
					meta.append(f"by {item['created_by']}")
				st.caption(" | ".join(meta))
				if item.get("snippet"):
					st.write(item["snippet"])

	except requests.RequestException as e:  # network/API errors
		st.error(f"API request failed: {e}")  # show human-friendly message

# Show a footer indicator of current mode
st.sidebar.markdown("---")  # separator
if local_engine is not None:
	st.sidebar.caption("Mode: Local engine")  # mode label
else:
	st.sidebar.caption("Mode: API client (ensure uvicorn api:app --reload is running)")  # mode label
