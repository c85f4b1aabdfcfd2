# run_cleanup.py
"""
Re-runs subcollection cleanup by hand, e.g. after the delete trigger ran out
of time on a very large trip.

Usage:
    python run_cleanup.py --trip-id abc123
    python run_cleanup.py --collection trips/abc123/expenses --batch-size 200
"""
import argparse
import logging
import sys

from shared_globals import get_db, CLEANUP_BATCH_SIZE, CLEANUP_MAX_DEPTH
from trips.services.cleanup_engine import CleanupEngine
from trips.utils.errors import AppError

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Recursively delete Firestore subcollections (batched)")
    target = p.add_mutually_exclusive_group(required=True)
    target.add_argument("--trip-id", help="clean up the waypoints/chat/expenses of trips/{trip-id}")
    target.add_argument("--collection", help="collection path to delete, e.g. trips/abc/waypoints")
    p.add_argument("--batch-size", type=int, default=CLEANUP_BATCH_SIZE)
    p.add_argument("--max-depth", type=int, default=CLEANUP_MAX_DEPTH)
    return p.parse_args(argv)


def run(args, db):
    engine = CleanupEngine(db, batch_size=args.batch_size, max_depth=args.max_depth)
    if args.trip_id:
        counts = engine.delete_trip(args.trip_id)
        for name, count in counts.items():
            print(f"trips/{args.trip_id}/{name}: deleted {count} documents")
        return sum(counts.values())

    deleted = engine.delete_collection(args.collection)
    print(f"{args.collection}: deleted {deleted} documents")
    return deleted


def main(argv=None):
    args = parse_args(argv)
    try:
        run(args, get_db())
    except ValueError as e:
        print(f"❌ {e}")
        return 2
    except AppError as e:
        print(f"❌ {e.message}")
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
