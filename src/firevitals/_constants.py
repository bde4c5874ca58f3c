"""Internal constants shared across the library."""

# ------------------------------------------------------------------
# Persistence
# ------------------------------------------------------------------

STATE_KEY = "fireVitals:v2"
LEGACY_STATE_KEY = "fireVitals:v1"
SCHEMA_VERSION = 2

LEGACY_SCENE_ID = "scene-legacy"
LEGACY_SCENE_NAME = "Current Scene"
DEFAULT_SCENE_NAME = "Untitled Scene"

# ------------------------------------------------------------------
# Export
# ------------------------------------------------------------------

EXPORT_TITLE = "Firefighter Vitals Export"
UNKNOWN_FIREFIGHTER = "Unknown"
NO_VITALS_LINE = "No vitals recorded."
TIME_FORMAT = "%Y-%m-%d %H:%M:%S"

TABLE_COLUMNS: tuple[str, ...] = (
    "time",
    "firefighter",
    "unit",
    "heartRate",
    "respRate",
    "oxygenSat",
    "bpSystolic",
    "bpDiastolic",
    "temperatureF",
    "notes",
)

CSV_CONTENT_TYPE = "text/csv"
PDF_CONTENT_TYPE = "application/pdf"

# Report layout, in points on a US-letter page (612 x 792), measured from the top.
PAGE_MARGIN = 40.0
CONTENT_HEIGHT_LIMIT = 740.0
CONTENT_WIDTH = 520.0
LINE_HEIGHT = 12.0
HEADER_LINE_HEIGHT = 14.0
TITLE_ADVANCE = 18.0
EXPORTED_ADVANCE = 20.0
SECTION_GAP = 10.0

TITLE_FONT = ("Helvetica-Bold", 16)
HEADER_FONT = ("Helvetica-Bold", 12)
BODY_FONT = ("Helvetica", 10)
