"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_PASSWORD = "123456"
DEFAULT_HASH_ITERATIONS = 600_000
DEFAULT_HISTORY_LIMIT = 10

MIN_NAME_LENGTH = 2
MIN_PASSWORD_LENGTH = 6
MAX_PASSWORD_STRENGTH = 5

EMPLOYEES_TABLE = "employees"
ATTENDANCE_TABLE = "attendance"
