import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# "file": one JSON file per storage key under DATA_DIR; "mysql": kv_store table.
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "file")
DATA_DIR = os.getenv("DATA_DIR", "instance/data")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "invention_station"),
}

DEBUG = True

# mysql only: apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Write the sample users/materials/... for collections that are not stored yet
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "1")))

LOG_FILE = os.getenv("LOG_FILE", "")

CANVAS_WIDTH = 600
CANVAS_HEIGHT = 400

SESSION_DAYS = int(os.getenv("SESSION_DAYS", "7"))
