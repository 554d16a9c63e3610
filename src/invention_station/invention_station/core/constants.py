"""Constants and defaults.

Note: storage keys keep the names the portal has always used so existing
data stays readable.
"""

KEY_PREFIX = "inventionStation_"

USERS_KEY = f"{KEY_PREFIX}users"
MATERIALS_KEY = f"{KEY_PREFIX}materials"
SHIFTS_KEY = f"{KEY_PREFIX}shifts"
NOTICES_KEY = f"{KEY_PREFIX}notices"
APP_LINKS_KEY = f"{KEY_PREFIX}appLinks"
INVENTION_NOTES_KEY = f"{KEY_PREFIX}inventionNotes"
ATTENDANCE_KEY_PREFIX = f"{KEY_PREFIX}attendance_"

DEFAULT_SESSION_DAYS = 7
DEFAULT_UPCOMING_LIMIT = 3
MIN_PASSWORD_LENGTH = 6

CANVAS_WIDTH = 600
CANVAS_HEIGHT = 400
BACKGROUND_COLOR = "#ffffff"
INK_COLOR = "#000000"
PEN_WIDTH = 2
ERASER_WIDTH = 20
