import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

FIREBASE_CONFIG = {
    "api_key": os.getenv("FIREBASE_API_KEY", ""),
    "project_id": os.getenv("FIREBASE_PROJECT_ID", ""),
    "credentials": os.getenv("FIREBASE_CREDENTIALS", ""),
}

APP_TIMEZONE = os.getenv("APP_TIMEZONE", "Asia/Jakarta")

ONE_CHECKIN_PER_DAY = bool(int(os.getenv("ONE_CHECKIN_PER_DAY", "0")))

IDENTITY_TIMEOUT = float(os.getenv("IDENTITY_TIMEOUT", "10"))

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
