# trips/routes/share_link_routes.py
from flask import Blueprint, request, jsonify, g, current_app
from firebase_admin import firestore
from user_auth.utils import login_required_user
from user_auth.permissions import can_invite
from trips.services.token_service import token_service as default_token_service
from trips.utils.errors import AppError, ErrorCodes, error_response
from trips.utils.firestore_paths import trip_doc, share_links_col
from shared_globals import FRONTEND_URL, SHARE_LINK_DEFAULT_EXPIRY_DAYS, SHARE_LINK_MAX_EXPIRY_DAYS
import datetime

SHARE_ROLES = ('EDITOR', 'VIEWER')


def build_share_url(raw_token, base_url=None):
    base_url = (base_url or FRONTEND_URL).rstrip('/')
    return f"{base_url}/share/{raw_token}"


def to_timestamp_dict(dt):
    """Firestore Timestamp shape: whole seconds since the epoch plus nanoseconds."""
    return {"seconds": int(dt.timestamp()), "nanoseconds": dt.microsecond * 1000}


def create_share_link_bp(db_instance, rule='/generateShareLink', token_service=None, frontend_url=None):
    share_link_bp = Blueprint('share_link_bp', __name__)
    tokens = token_service or default_token_service

    def load_trip_for_inviter(trip_id, uid):
        trip_snapshot = trip_doc(db_instance, trip_id).get()
        if not trip_snapshot.exists:
            raise AppError(ErrorCodes.NOT_FOUND, "Trip not found", 404)
        trip_data = trip_snapshot.to_dict() or {}
        if not can_invite(uid, trip_data):
            raise AppError(ErrorCodes.FORBIDDEN, "Only the trip owner can generate share links", 403)
        return trip_data

    @share_link_bp.route(rule, methods=['POST'])
    @login_required_user
    def generate_share_link():
        user_uid = g.user_uid

        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return error_response(ErrorCodes.BAD_REQUEST, "Request body must be a JSON object", 400)

        trip_id = data.get('tripId')
        role = data.get('role')
        if not trip_id or not role:
            return error_response(ErrorCodes.BAD_REQUEST, "Request body must include tripId and role", 400)
        if role not in SHARE_ROLES:
            return error_response(ErrorCodes.BAD_REQUEST, 'role must be either "EDITOR" or "VIEWER"', 400)
        if not isinstance(trip_id, str) or not trip_id.strip():
            return error_response(ErrorCodes.BAD_REQUEST, "tripId must be a non-empty string", 400)
        # A slash would turn trips/{tripId} into a path to some other document
        if '/' in trip_id:
            return error_response(ErrorCodes.BAD_REQUEST, "tripId must not contain '/'", 400)

        expiry_days = data.get('expiryDays')
        if expiry_days is None:
            expiry_days = SHARE_LINK_DEFAULT_EXPIRY_DAYS
        # bool is an int subclass; true/false are not day counts
        if isinstance(expiry_days, bool) or not isinstance(expiry_days, int) \
                or not 1 <= expiry_days <= SHARE_LINK_MAX_EXPIRY_DAYS:
            return error_response(
                ErrorCodes.BAD_REQUEST,
                f"expiryDays must be an integer between 1 and {SHARE_LINK_MAX_EXPIRY_DAYS}",
                400,
            )

        current_app.logger.info(
            f"Share link requested by {user_uid} for trip {trip_id} (role={role}, expiryDays={expiry_days})"
        )

        try:
            load_trip_for_inviter(trip_id, user_uid)

            token_pair = tokens.generate_token()
            expiry = datetime.datetime.now(datetime.timezone.utc) + datetime.timedelta(days=expiry_days)

            share_links_col(db_instance).add({
                "tripId": trip_id,
                "ownerId": user_uid,
                "role": role,
                "tokenHash": token_pair.hashed_token,  # never the raw token
                "createdAt": firestore.SERVER_TIMESTAMP,
                "expiry": expiry,
                "used": False,
                "usedAt": None,
            })
        except AppError:
            raise
        except Exception as e:
            current_app.logger.error(f"Error generating share link for trip {trip_id} by {user_uid}: {e}", exc_info=True)
            return error_response(
                ErrorCodes.INTERNAL_SERVER_ERROR,
                "An unexpected error occurred while generating the share link",
                500,
            )

        current_app.logger.info(f"Share link created for trip {trip_id} (role={role}, expires {expiry.isoformat()})")

        return jsonify({
            "url": build_share_url(token_pair.raw_token, frontend_url),
            "expiry": to_timestamp_dict(expiry),
        }), 200

    return share_link_bp
