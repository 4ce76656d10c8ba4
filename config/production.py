import os

ENVIRONMENT = "production"

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "candi_qr"),
    "pool_size": int(os.getenv("DB_POOL_SIZE", "10")),
}

JWT_SECRET = os.getenv("JWT_SECRET", "please-set-JWT_SECRET")
JWT_EXPIRES_HOURS = int(os.getenv("JWT_EXPIRES_HOURS", "24"))
TOKEN_COOKIE_DAYS = int(os.getenv("TOKEN_COOKIE_DAYS", "7"))

FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:3000")
PORT = int(os.getenv("PORT", "5000"))

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

RATE_LIMIT = os.getenv("RATE_LIMIT", "100 per 15 minutes")
RATELIMIT_ENABLED = bool(int(os.getenv("RATELIMIT_ENABLED", "1")))

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
