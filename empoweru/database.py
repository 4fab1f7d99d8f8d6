"""
empoweru/database.py - Firebase Admin SDK and Firestore client lifecycle.

`init_firestore` runs once from the application lifespan; the Firebase app and the
Firestore client are kept on `app.state` and handed to route handlers through the
`get_db` dependency. `close_firestore` releases both at shutdown.
"""
import logging
from typing import Tuple

import firebase_admin
from fastapi import Request
from firebase_admin import credentials, firestore
from google.cloud.firestore import Client

from empoweru.config import Settings

logger = logging.getLogger(__name__)


def _credential(settings: Settings) -> credentials.Certificate:
    if settings.has_env_credentials:
        # Cloud Run: service account fields come from the environment
        return credentials.Certificate({
            "type": "service_account",
            "project_id": settings.firebase_project_id,
            "private_key_id": settings.firebase_private_key_id,
            "private_key": settings.firebase_private_key.replace("\\n", "\n"),
            "client_email": settings.firebase_client_email,
            "client_id": settings.firebase_client_id,
            "auth_uri": settings.firebase_auth_uri,
            "token_uri": settings.firebase_token_uri,
            "auth_provider_x509_cert_url": settings.firebase_auth_provider_x509_cert_url,
            "client_x509_cert_url": settings.firebase_client_x509_cert_url,
        })
    # Local development: service account file
    return credentials.Certificate(settings.firebase_cred_file)


def init_firestore(settings: Settings) -> Tuple[firebase_admin.App, Client]:
    """Initialise the default Firebase app (once) and return it with a Firestore client."""
    options = {"projectId": settings.firebase_project_id} if settings.firebase_project_id else None
    try:
        firebase_app = firebase_admin.initialize_app(_credential(settings), options)
    except ValueError as e:
        if "already exists" not in str(e):
            raise
        firebase_app = firebase_admin.get_app()

    if settings.firebase_database_id:
        client = firestore.client(firebase_app, settings.firebase_database_id)
    else:
        client = firestore.client(firebase_app)
    logger.info("Firestore client ready (project=%s)", firebase_app.project_id)
    return firebase_app, client


def close_firestore(firebase_app, client) -> None:
    if client is not None:
        client.close()
    if firebase_app is not None:
        firebase_admin.delete_app(firebase_app)
    logger.info("Firestore client closed")


def get_db(request: Request):
    """FastAPI dependency returning the process-wide Firestore client."""
    db = getattr(request.app.state, "db", None)
    if db is None:
        raise RuntimeError("Firestore client is not initialised")
    return db
