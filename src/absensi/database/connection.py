from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import firebase_admin
from firebase_admin import credentials, firestore

logger = logging.getLogger(__name__)


@dataclass
class FirebaseConfig:
    api_key: str
    project_id: str
    credentials: str = ""


class FirestoreConnection:
    """Singleton-like holder of the Firebase app and its Firestore client.

    Note: The client is created lazily on first use so the web app can start
    (and tests can run) without reaching Google Cloud.
    """

    _instance: Optional["FirestoreConnection"] = None

    def __init__(self, config: FirebaseConfig):
        self._config = config
        self._client = None

    @classmethod
    def get_instance(cls, config: FirebaseConfig) -> "FirestoreConnection":
        if cls._instance is None:
            cls._instance = FirestoreConnection(config)
        return cls._instance

    def _app(self) -> firebase_admin.App:
        try:
            return firebase_admin.get_app()
        except ValueError:
            pass

        if self._config.credentials:
            cred = credentials.Certificate(self._config.credentials)
        else:
            cred = credentials.ApplicationDefault()

        options = {"projectId": self._config.project_id} if self._config.project_id else None
        logger.info("Initializing Firebase app for project %r", self._config.project_id or "<default>")
        return firebase_admin.initialize_app(cred, options)

    def client(self):
        if self._client is None:
            self._client = firestore.client(self._app())
        return self._client
