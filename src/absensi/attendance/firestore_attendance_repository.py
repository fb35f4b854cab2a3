from __future__ import annotations

import logging
from typing import Iterable, Sequence

from firebase_admin import firestore

from ..core.constants import ATTENDANCE_COLLECTION
from ..core.exceptions import MalformedDocumentError
from ..database.connection import FirestoreConnection
from ..database.firestore_base import snapshot_data, store_errors
from .model import AttendanceRecord, NewAttendance
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class FirestoreAttendanceRepository(AttendanceRepository):
    def __init__(self, conn: FirestoreConnection):
        self._conn = conn

    def _collection(self):
        return self._conn.client().collection(ATTENDANCE_COLLECTION)

    @staticmethod
    def _to_records(snaps: Iterable) -> list[AttendanceRecord]:
        out: list[AttendanceRecord] = []
        for snap in snaps:
            try:
                out.append(AttendanceRecord.from_document(snap.id, snapshot_data(snap)))
            except MalformedDocumentError as e:
                # Quarantined: left out of results, kept in the store.
                logger.warning("Skipping malformed attendance document: %s", e)
        return out

    def create(self, record: NewAttendance) -> str:
        data = record.to_document()
        data["createdAt"] = firestore.SERVER_TIMESTAMP
        with store_errors("Gagal menyimpan absensi"):
            _, ref = self._collection().add(data)
        return ref.id

    def get_recent_for_user(self, uid: str, limit: int) -> Sequence[AttendanceRecord]:
        with store_errors("Gagal memuat riwayat absensi"):
            query = (
                self._collection()
                .where(filter=firestore.FieldFilter("uid", "==", uid))
                .order_by("createdAt", direction=firestore.Query.DESCENDING)
                .limit(int(limit))
            )
            snaps = list(query.stream())
        return self._to_records(snaps)

    def exists_for_user_and_date(self, uid: str, date_str: str) -> bool:
        with store_errors("Gagal memeriksa absensi hari ini"):
            query = (
                self._collection()
                .where(filter=firestore.FieldFilter("uid", "==", uid))
                .where(filter=firestore.FieldFilter("dateStr", "==", date_str))
                .limit(1)
            )
            return any(True for _ in query.stream())

    def get_in_date_range(self, *, start: str, end: str) -> Sequence[AttendanceRecord]:
        # Needs a composite index on (dateStr desc, createdAt desc).
        with store_errors("Gagal memuat data absensi"):
            query = (
                self._collection()
                .where(filter=firestore.FieldFilter("dateStr", ">=", start))
                .where(filter=firestore.FieldFilter("dateStr", "<=", end))
                .order_by("dateStr", direction=firestore.Query.DESCENDING)
                .order_by("createdAt", direction=firestore.Query.DESCENDING)
            )
            snaps = list(query.stream())
        return self._to_records(snaps)
