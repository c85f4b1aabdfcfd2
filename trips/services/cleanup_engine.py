"""
Recursive cleanup of Firestore subcollections.

Firestore does not delete a document's subcollections along with the
document, so when a trip is deleted its waypoints, chat and expenses (and
anything nested under them) have to be removed explicitly. Deletion is done
in pages of at most ``batch_size`` documents, each page committed through
write batches that never exceed Firestore's 500-operation limit.

Ordering: every subcollection of a document is emptied before the document's
own delete is queued, so a parent is never removed while children remain.
"""

import logging

from shared_globals import FIRESTORE_BATCH_LIMIT, CLEANUP_MAX_DEPTH
from trips.utils.errors import CleanupDepthError
from trips.utils.firestore_paths import trip_doc, collection_path, TRIP_SUBCOLLECTIONS

logger = logging.getLogger(__name__)


def recursive_delete(db, collection_ref, batch_size=FIRESTORE_BATCH_LIMIT, max_depth=CLEANUP_MAX_DEPTH, _depth=0):
    """
    Deletes every document in ``collection_ref`` and, depth first, every
    subcollection below those documents.

    Pages are fetched with a cursor (``start_after`` the last document of the
    previous page), never with offsets. A page shorter than ``batch_size``
    means the collection is exhausted; a full page costs one more query that
    comes back empty.

    Returns the number of documents deleted across all levels. Store errors
    propagate unchanged; whatever was committed before the error stays
    deleted and a re-run picks up the rest.
    """
    if not 1 <= batch_size <= FIRESTORE_BATCH_LIMIT:
        raise ValueError(f"batch_size must be between 1 and {FIRESTORE_BATCH_LIMIT}, got {batch_size}")
    if _depth > max_depth:
        logger.error(f"Refusing to descend into {collection_path(collection_ref)}: depth {_depth} exceeds {max_depth}")
        raise CleanupDepthError(collection_path(collection_ref), max_depth)

    deleted = 0
    cursor = None

    while True:
        query = collection_ref.limit(batch_size)
        if cursor is not None:
            query = query.start_after(cursor)

        docs = list(query.stream())
        if not docs:
            break

        batch = db.batch()
        pending = 0
        for doc in docs:
            for subcollection in doc.reference.collections():
                deleted += recursive_delete(db, subcollection, batch_size, max_depth, _depth + 1)

            batch.delete(doc.reference)
            pending += 1

            if pending >= batch_size:
                batch.commit()
                logger.debug(f"Committed {pending} deletes in {collection_path(collection_ref)}")
                deleted += pending
                batch = db.batch()
                pending = 0

        if pending:
            batch.commit()
            logger.debug(f"Committed {pending} deletes in {collection_path(collection_ref)}")
            deleted += pending

        cursor = docs[-1]
        if len(docs) < batch_size:
            break

    return deleted


def delete_trip_subcollections(db, trip_ref, batch_size=FIRESTORE_BATCH_LIMIT, max_depth=CLEANUP_MAX_DEPTH):
    """Empties the known subcollections of a trip. Returns {name: deleted_count}."""
    counts = {}
    for name in TRIP_SUBCOLLECTIONS:
        counts[name] = recursive_delete(db, trip_ref.collection(name), batch_size, max_depth)
    return counts


class CleanupEngine:
    """recursive_delete bound to one Firestore client and one set of limits."""

    def __init__(self, db, batch_size=FIRESTORE_BATCH_LIMIT, max_depth=CLEANUP_MAX_DEPTH):
        if not 1 <= batch_size <= FIRESTORE_BATCH_LIMIT:
            raise ValueError(f"batch_size must be between 1 and {FIRESTORE_BATCH_LIMIT}, got {batch_size}")
        self.db = db
        self.batch_size = batch_size
        self.max_depth = max_depth

    def recursive_delete(self, collection_ref):
        return recursive_delete(self.db, collection_ref, self.batch_size, self.max_depth)

    def delete_trip_subcollections(self, trip_ref):
        return delete_trip_subcollections(self.db, trip_ref, self.batch_size, self.max_depth)

    def delete_trip(self, trip_id):
        # The trip document itself is gone already (this runs after its delete);
        # the reference is still valid for reaching the subcollections.
        return self.delete_trip_subcollections(trip_doc(self.db, trip_id))

    def delete_collection(self, path):
        """Deletes a collection given as a slash path, e.g. 'trips/abc/waypoints'."""
        return self.recursive_delete(self.db.collection(path))
