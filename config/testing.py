import os

ENVIRONMENT = "testing"

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "candi_qr_test"),
    "pool_size": 2,
}

JWT_SECRET = "test-jwt-secret"
JWT_EXPIRES_HOURS = 24
TOKEN_COOKIE_DAYS = 7

FRONTEND_URL = "http://localhost:3000"
PORT = 5000

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

RATE_LIMIT = "100 per 15 minutes"
RATELIMIT_ENABLED = False

AUTO_INIT_DB = False
