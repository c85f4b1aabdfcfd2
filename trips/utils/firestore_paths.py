# Centralized Firestore path helpers
# Canonical: /trips/{trip_id}/{waypoints|chat|expenses}/{doc_id}
#            /shareLinks/{link_id}

TRIPS_COLLECTION = "trips"
SHARE_LINKS_COLLECTION = "shareLinks"
TRIP_SUBCOLLECTIONS = ("waypoints", "chat", "expenses")


def trips_col(db):
    return db.collection(TRIPS_COLLECTION)


def trip_doc(db, trip_id: str):
    return trips_col(db).document(trip_id)


def share_links_col(db):
    return db.collection(SHARE_LINKS_COLLECTION)


def collection_path(collection_ref):
    """Slash path of a collection reference, e.g. 'trips/abc/waypoints'."""
    parent = collection_ref.parent
    if parent is None:
        return collection_ref.id
    return f"{parent.path}/{collection_ref.id}"
