"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

LATE_THRESHOLD_HOUR = 7
LATE_THRESHOLD_MINUTE = 30

DEFAULT_HISTORY_LIMIT = 5
DEFAULT_LOCATION_TIMEOUT_SECONDS = 5.0
DEFAULT_IDENTITY_TIMEOUT_SECONDS = 10.0

USERS_COLLECTION = "users"
ATTENDANCE_COLLECTION = "attendance"

DASHBOARD_LOAD_ERROR = "Gagal memuat data. Pastikan index Firestore sudah dibuat jika menggunakan filter kompleks."
