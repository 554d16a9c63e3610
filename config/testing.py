import os

SECRET_KEY = "test-secret"

STORAGE_BACKEND = "file"
DATA_DIR = os.getenv("DATA_DIR", "instance/test-data")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "invention_station_test"),
}

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
AUTO_SEED_DB = True

LOG_FILE = ""

CANVAS_WIDTH = 600
CANVAS_HEIGHT = 400

SESSION_DAYS = 1
