import os

SECRET_KEY = "test-secret"

JWT_SECRET = "test-jwt-secret"
JWT_ALGORITHM = "HS256"
TOKEN_TTL_DAYS = 7

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "smart_attendance_test"),
}
DB_POOL_SIZE = 2

DEBUG = False
TESTING = True

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

LOG_LEVEL = "WARNING"
LOG_FILE = None

CORS_ORIGINS = "*"
