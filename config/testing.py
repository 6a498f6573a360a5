from config import db_config_from_env

SECRET_KEY = "test-secret"
DB_CONFIG = db_config_from_env("timesheets_test")

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"
SESSION_DAYS = 1

# Tests run over in-memory repositories
AUTO_INIT_DB = False
AUTO_SEED_DB = False

DEFAULT_ADMIN_PASSWORD = "admin123"
