# shared_globals.py
import os
import json
import logging
from dotenv import load_dotenv
import firebase_admin
from firebase_admin import credentials, firestore

load_dotenv()

# --- Firebase credentials ---
FIREBASE_SERVICE_ACCOUNT_CONTENT = os.environ.get('FIREBASE_SERVICE_ACCOUNT_CONTENT')
FIREBASE_SERVICE_ACCOUNT_PATH = os.environ.get(
    'FIREBASE_SERVICE_ACCOUNT_PATH', "credentials/serviceAccountKey.json"
)

# --- Share links ---
FRONTEND_URL = os.environ.get('FRONTEND_URL', 'https://roaddoggs.app')
SHARE_LINK_DEFAULT_EXPIRY_DAYS = int(os.environ.get('SHARE_LINK_DEFAULT_EXPIRY_DAYS', 30))
SHARE_LINK_MAX_EXPIRY_DAYS = int(os.environ.get('SHARE_LINK_MAX_EXPIRY_DAYS', 365))

# --- Cleanup ---
FIRESTORE_BATCH_LIMIT = 500  # Firestore atomic write ceiling
CLEANUP_BATCH_SIZE = min(int(os.environ.get('CLEANUP_BATCH_SIZE', FIRESTORE_BATCH_LIMIT)), FIRESTORE_BATCH_LIMIT)
CLEANUP_MAX_DEPTH = int(os.environ.get('CLEANUP_MAX_DEPTH', 16))

# --- Cloud Functions ---
FUNCTIONS_REGION = os.environ.get('FUNCTIONS_REGION', 'us-central1')

_db = None


def initialize_firebase():
    """
    Initializes the default Firebase app once.
    Tries the JSON content env var, then the service account file, then
    Application Default Credentials (what the Cloud Functions runtime provides).
    """
    if firebase_admin._apps:  # Already initialized
        return firebase_admin.get_app()

    if FIREBASE_SERVICE_ACCOUNT_CONTENT:
        cred = credentials.Certificate(json.loads(FIREBASE_SERVICE_ACCOUNT_CONTENT))
        app = firebase_admin.initialize_app(cred)
        logging.info("Firebase initialized using environment variable.")
    elif os.path.exists(FIREBASE_SERVICE_ACCOUNT_PATH):
        cred = credentials.Certificate(FIREBASE_SERVICE_ACCOUNT_PATH)
        app = firebase_admin.initialize_app(cred)
        logging.info("Firebase initialized using local file path.")
    else:
        app = firebase_admin.initialize_app()
        logging.info(
            f"No service account at {FIREBASE_SERVICE_ACCOUNT_PATH}; "
            f"Firebase initialized with Application Default Credentials."
        )
    return app


def get_db():
    """Returns the shared Firestore client, initializing Firebase on first use."""
    global _db
    if _db is None:
        _db = firestore.client(app=initialize_firebase())
    return _db
