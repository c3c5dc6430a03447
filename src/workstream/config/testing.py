import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "workstream_test"),
}

JWT_SECRET = "test-jwt-secret"
JWT_EXPIRES_DAYS = 1

CORS_ORIGINS = ["http://localhost:5173"]

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False
AUTO_SEED_DB = False

ADMIN_EMAIL = "admin@test.local"
ADMIN_PASSWORD = "admin123"
ADMIN_NAME = "Test Admin"
