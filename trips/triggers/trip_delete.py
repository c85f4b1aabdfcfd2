import logging

from shared_globals import CLEANUP_BATCH_SIZE, CLEANUP_MAX_DEPTH
from trips.services.cleanup_engine import CleanupEngine

logger = logging.getLogger(__name__)


def handle_trip_delete(db, trip_id, engine=None):
    """
    Removes everything left under trips/{trip_id} after the trip document was deleted.

    Safe to run more than once for the same trip: an already-empty subtree is
    a no-op. Failures are logged and re-raised so the event is redelivered.
    """
    engine = engine or CleanupEngine(db, batch_size=CLEANUP_BATCH_SIZE, max_depth=CLEANUP_MAX_DEPTH)
    logger.info(f"Starting cleanup for deleted trip document: trips/{trip_id}")

    try:
        counts = engine.delete_trip(trip_id)
    except Exception as e:
        logger.error(f"Error cleaning up subcollections for trip {trip_id}: {e}", exc_info=True)
        raise

    summary = ", ".join(f"{name}={count}" for name, count in counts.items())
    logger.info(f"Successfully cleaned up subcollections for trip {trip_id} ({summary})")
    return counts
