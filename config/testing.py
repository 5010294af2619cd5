SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

HOST = "127.0.0.1"
PORT = 3000

STORE_BACKEND = "memory"
DATA_PATH = "data/test-database.json"

DB_CONFIG = {
    "host": "localhost",
    "port": 3306,
    "user": "root",
    "password": "",
    "database": "gatepass_test",
}

TIMEZONE = "UTC"

ENCODE_TIMEOUT_SECONDS = 5.0
QR_BOX_SIZE = 4
QR_BORDER = 1

AUTO_INIT_DB = False
AUTO_SEED_DB = True
