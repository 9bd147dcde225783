from functools import wraps
from flask_jwt_extended import verify_jwt_in_request, get_jwt
from flask import jsonify

from toolshed.utils.auth import ADMIN_ROLES


def role_required(*roles):
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            verify_jwt_in_request()
            claims = get_jwt()
            role = claims.get("role")
            if role not in roles:
                return jsonify({"success": False, "message": "Requires admin privileges"}), 403
            return fn(*args, **kwargs)
        return wrapper
    return decorator


admin_required = role_required(*ADMIN_ROLES)
