SECRET_KEY = "test-secret"

STORE_BACKEND = "memory"
STORE_PATH = None
DB_CONFIG = None

LOGIN_DELAY_SECONDS = 0.0

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False
AUTO_SEED_DATA = False
