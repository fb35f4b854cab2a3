import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

FIREBASE_CONFIG = {
    "api_key": os.getenv("FIREBASE_API_KEY", ""),
    "project_id": os.getenv("FIREBASE_PROJECT_ID", ""),
    # Path to a service account JSON; empty falls back to application default credentials
    "credentials": os.getenv("FIREBASE_CREDENTIALS", ""),
}

APP_TIMEZONE = os.getenv("APP_TIMEZONE", "")

# Reject a second check-in by the same user on the same calendar day
ONE_CHECKIN_PER_DAY = bool(int(os.getenv("ONE_CHECKIN_PER_DAY", "0")))

IDENTITY_TIMEOUT = float(os.getenv("IDENTITY_TIMEOUT", "10"))

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
