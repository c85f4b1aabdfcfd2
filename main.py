"""
Cloud Functions for Firebase entry points.

    on_trip_delete       Firestore trigger on trips/{tripId} deletes
    generate_share_link  HTTPS endpoint, served by the Flask app in app.py
"""

from firebase_functions import firestore_fn, https_fn, options

from app import create_app
from shared_globals import get_db, FUNCTIONS_REGION
from trips.triggers.trip_delete import handle_trip_delete

_share_link_app = None


def _get_share_link_app():
    # The function URL is the route, so the blueprint is mounted at "/"
    global _share_link_app
    if _share_link_app is None:
        _share_link_app = create_app(get_db(), share_link_rule='/')
    return _share_link_app


@firestore_fn.on_document_deleted(
    document="trips/{tripId}",
    region=FUNCTIONS_REGION,
    timeout_sec=540,
    memory=options.MemoryOption.GB_1,
    retry=True,
)
def on_trip_delete(event: firestore_fn.Event) -> None:
    """Cleans up a trip's subcollections once the trip document is deleted."""
    trip_id = event.params["tripId"]
    handle_trip_delete(get_db(), trip_id)


@https_fn.on_request(
    region=FUNCTIONS_REGION,
    timeout_sec=60,
    memory=options.MemoryOption.GB_1,
)
def generate_share_link(req: https_fn.Request) -> https_fn.Response:
    app = _get_share_link_app()
    with app.request_context(req.environ):
        return app.full_dispatch_request()
