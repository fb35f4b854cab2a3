SECRET_KEY = "test-secret"

FIREBASE_CONFIG = {
    "api_key": "test-api-key",
    "project_id": "test-project",
    "credentials": "",
}

APP_TIMEZONE = ""

ONE_CHECKIN_PER_DAY = False

IDENTITY_TIMEOUT = 1.0

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"
