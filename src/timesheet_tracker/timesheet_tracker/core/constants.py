"""Constants and defaults."""

MINUTES_PER_DAY = 24 * 60

# Break deduction tiers (minutes)
FREE_BREAK_MAX_MINUTES = 30
FLAT_CREDIT_MAX_MINUTES = 60
FLAT_CREDIT_DEDUCTION_MINUTES = 30

DEFAULT_SESSION_DAYS = 1
DEFAULT_ADMIN_USERNAME = "admin"
DEFAULT_ADMIN_HOURLY_RATE = "25.00"

TIME_PATTERN = r"^([01]\d|2[0-3]):([0-5]\d)$"
DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"
