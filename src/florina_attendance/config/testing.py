import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "florina_test"),
    "connection_timeout": 5,
}

ADMIN_API_KEY = "test-admin-key"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

# Cheap hashes keep the test suite fast.
PASSWORD_HASH_ITERATIONS = 1000
REHASH_LEGACY_CREDENTIALS = False
ATTENDANCE_FIRST_SUBMISSION_FINAL = False
HISTORY_LIMIT = 10

AUTO_INIT_DB = False
AUTO_SEED_DB = False
