"""Internal constants shared across the library."""

BASE_URL = "https://shafakalkhaleej.com/api"
USER_AGENT = "pyvtrack/1"
CARS_ENDPOINT = "/cars.php"
AGENTS_ENDPOINT = "/agents.php"
DEFAULT_REQUEST_TIMEOUT = 30.0

# ------------------------------------------------------------------
# Text recovery
# ------------------------------------------------------------------

REPLACEMENT_CHAR = "�"

#: Characters that show up in Latin-1/cp1252 mojibake of UTF-8 text but
#: essentially never in clean business text of this domain.
MOJIBAKE_MARKERS: frozenset[str] = frozenset("ÃÂØÙÐ×¢«»ß" + REPLACEMENT_CHAR)

ARABIC_FIRST = 0x0600
ARABIC_LAST = 0x06FF

# ------------------------------------------------------------------
# Lifecycle sentinels
# ------------------------------------------------------------------

#: MySQL zero date, sent for DATE columns that were never filled.
ZERO_DATE = "0000-00-00"
NULL_LITERAL = "null"
