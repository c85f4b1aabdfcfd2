# user_auth/permissions.py


def is_trip_owner(uid, trip_data):
    """True when uid is the ownerId recorded on the trip document."""
    if not uid or not trip_data:
        return False
    return trip_data.get('ownerId') == uid


def can_invite(uid, trip_data):
    """Only the owner of a trip may hand out share links for it."""
    return is_trip_owner(uid, trip_data)
