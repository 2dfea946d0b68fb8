"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DESIGNATION_RANKS = {
    "Rig I/C": 1,
    "Shift I/C": 2,
    "Asst Shift I/C": 3,
    "Top Man": 4,
    "Rig Man": 5,
}
UNRANKED_DESIGNATION = 999

EMPLOYEE_ID_WIDTH = 3

MIN_YEAR = 1900

BLANK = "blank"

DEFAULT_COMPANY_NAME = "Company Name"
DEFAULT_RIG_NAME = "ROM-100-II"

DEFAULT_WORKSPACES = {
    "domestic": "Domestic",
    "ongc": "ONGC",
}

DEFAULT_EXPORT_TIMEOUT_SECONDS = 30
