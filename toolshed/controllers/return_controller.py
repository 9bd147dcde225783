from flask import Blueprint, request
from flask_jwt_extended import jwt_required

from toolshed.services.return_service import ReturnService
from toolshed.utils.auth import current_identity
from toolshed.utils.responses import error_response, json_error, json_ok
from toolshed.utils.serializers import condition_to_dict

return_bp = Blueprint("returns", __name__)


@return_bp.post("/<receipt_id>")
@jwt_required()
def return_items(receipt_id: str):
    """Body: {"items": [{"item_id", "quantity", "condition", "notes"?}, ...]}"""
    identity = current_identity()
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return json_error("Request body must be a JSON object")
    try:
        journal = ReturnService.return_items(identity.user_id, receipt_id, data.get("items"))
        return json_ok(journal, message="Items returned successfully")
    except ValueError as e:
        return error_response(e)


@return_bp.get("/<receipt_id>/conditions")
@jwt_required()
def return_conditions(receipt_id: str):
    identity = current_identity()
    try:
        rows = ReturnService.get_return_conditions(identity.user_id, receipt_id)
        return json_ok([condition_to_dict(r) for r in rows], message="Return conditions retrieved successfully")
    except ValueError as e:
        return error_response(e)
