import os


def get_settings_module() -> str:
    # APP_ENV chooses the settings module, 'development' by default
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "absensi.settings.production"

    if env in {"test", "testing"}:
        return "absensi.settings.testing"

    return "absensi.settings.development"
