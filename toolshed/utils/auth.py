from collections import namedtuple

from flask_jwt_extended import get_jwt, get_jwt_identity

ADMIN_ROLES = ("admin", "superadmin")

Identity = namedtuple("Identity", ["user_id", "role", "email"])


def current_identity() -> Identity:
    """Caller identity from the verified JWT (call inside ``jwt_required``)."""
    claims = get_jwt() or {}
    return Identity(
        user_id=get_jwt_identity(),
        role=claims.get("role", "user"),
        email=claims.get("email"),
    )


def is_admin(identity: Identity) -> bool:
    return identity.role in ADMIN_ROLES
