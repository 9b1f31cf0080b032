import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "florina_db"),
    "connection_timeout": int(os.getenv("DB_TIMEOUT", "10")),
}

# Header key for the roster endpoints (admin sign-in lives with the identity provider)
ADMIN_API_KEY = os.getenv("ADMIN_API_KEY", "dev-admin-key")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

PASSWORD_HASH_ITERATIONS = int(os.getenv("PASSWORD_HASH_ITERATIONS", "600000"))
REHASH_LEGACY_CREDENTIALS = bool(int(os.getenv("REHASH_LEGACY_CREDENTIALS", "0")))
ATTENDANCE_FIRST_SUBMISSION_FINAL = bool(int(os.getenv("ATTENDANCE_FIRST_SUBMISSION_FINAL", "0")))
HISTORY_LIMIT = int(os.getenv("HISTORY_LIMIT", "10"))

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo employees on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
