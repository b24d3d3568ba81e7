import os

# Namespace for every key the index writes: <prefix>.nextid, <prefix>.dcs, <prefix>.trm.<term>
KEY_PREFIX: str = "acd"

# Store selection (see subcomplete.DB.api.make_store)
DEFAULT_DSN: str = os.environ.get("SUBCOMPLETE_DSN", "redis://localhost:6379/0")

# Upper bound (seconds) for a single storage call: sqlite busy timeout / redis socket timeout
STORE_TIMEOUT: float = 5.0

# /* ~~~ substring expansion cap: 0 = index every substring of every token ~~~ */
MAX_TERM_LENGTH: int = 0

# Case folding: "full" (casefold on ingest and query) or
# "ascii" (str.lower() on ingest, A-Z only on query: the legacy asymmetric pair)
QUERY_CASE_FOLD: str = "full"

# Postings are ordered by id *string* ("10" < "2"); True re-sorts results numerically
NUMERIC_ID_ORDER: bool = False

# Progress logging (set SUBCOMPLETE_VERBOSE=1 to enable)
VERBOSE: bool = os.environ.get("SUBCOMPLETE_VERBOSE") == "1"
PROGRESS_EVERY_LINES: int = 10_000

# Keys fetched per SCAN round trip when deleting by pattern
SCAN_BATCH: int = 1000
