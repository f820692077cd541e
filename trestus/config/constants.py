"""Constants for status classification and rendering."""

# Label names starting with this prefix encode a severity
STATUS_PREFIX = "status:"

# Cards in this list (case-insensitive) are resolved incidents
FIXED_LIST_NAME = "fixed"

# Status text back-filled for services without an open incident
OPERATIONAL_STATUS_TEXT = "Operational"

# Trello REST API
DEFAULT_API_BASE_URL = "https://api.trello.com/1"
DEFAULT_TIMEOUT_SECONDS = 30.0
ACTIONS_PAGE_LIMIT = 1000

# Default packaged template and stylesheet
DEFAULT_TEMPLATE_NAME = "trestus.html"
DEFAULT_STYLESHEET_NAME = "trestus.css"

# Log component names
COMPONENT_BOARD = "board"
COMPONENT_STATUS = "status"
COMPONENT_RENDERER = "renderer"
COMPONENT_CLI = "cli"
