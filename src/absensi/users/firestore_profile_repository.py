from __future__ import annotations

from typing import Optional

from firebase_admin import firestore

from ..core.constants import USERS_COLLECTION
from ..core.enums import Role
from ..database.connection import FirestoreConnection
from ..database.firestore_base import snapshot_data, store_errors
from .model import UserProfile
from .repository import ProfileRepository


class FirestoreProfileRepository(ProfileRepository):
    def __init__(self, conn: FirestoreConnection):
        self._conn = conn

    def _collection(self):
        return self._conn.client().collection(USERS_COLLECTION)

    def get_by_uid(self, uid: str) -> Optional[UserProfile]:
        with store_errors("Gagal memuat profil"):
            snap = self._collection().document(uid).get()
        if not snap.exists:
            return None
        return UserProfile.from_document(uid, snapshot_data(snap))

    def create_profile(self, *, uid: str, name: str, email: str, role: Role) -> None:
        with store_errors("Gagal menyimpan profil"):
            self._collection().document(uid).set(
                {
                    "name": name,
                    "email": email,
                    "role": role.value,
                    "createdAt": firestore.SERVER_TIMESTAMP,
                }
            )
