import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "halaqah_db"),
}

# "mysql" or "memory"
STORE_BACKEND = os.getenv("STORE_BACKEND", "mysql")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Applies schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

SCHOOL_NAME = os.getenv("SCHOOL_NAME", "MA'HAD AL FARUQ ASSALAFY")
SCHOOL_LOCATION = os.getenv("SCHOOL_LOCATION", "Kalibagor, Banyumas")
PHONE_COUNTRY_CODE = os.getenv("PHONE_COUNTRY_CODE", "62")
