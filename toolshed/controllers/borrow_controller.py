from flask import Blueprint, request
from flask_jwt_extended import jwt_required

from toolshed.services.borrow_service import BorrowService
from toolshed.services.receipt_service import ReceiptService
from toolshed.utils.auth import current_identity
from toolshed.utils.decorators import admin_required
from toolshed.utils.responses import error_response, json_error, json_ok
from toolshed.utils.serializers import receipt_to_dict

borrow_bp = Blueprint("borrow", __name__)


@borrow_bp.post("/")
@jwt_required()
def checkout():
    identity = current_identity()
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return json_error("Request body must be a JSON object")
    try:
        receipt = BorrowService.checkout(identity.user_id, data, user_email=identity.email)
        return json_ok(receipt_to_dict(receipt), message="Items borrowed successfully", code=201)
    except ValueError as e:
        return error_response(e)


@borrow_bp.get("/receipts")
@jwt_required()
def my_receipts():
    identity = current_identity()
    try:
        receipts = ReceiptService.get_receipts(identity.user_id, request.args.get("status"))
        return json_ok([receipt_to_dict(r) for r in receipts], message="Receipts retrieved successfully")
    except ValueError as e:
        return error_response(e)


@borrow_bp.get("/receipts/all")
@admin_required
def all_receipts_admin_only():
    try:
        receipts, total, has_more = ReceiptService.list_all_receipts(
            page=request.args.get("page", 1, type=int),
            limit=request.args.get("limit", 10, type=int),
        )
    except ValueError as e:
        return error_response(e)
    return json_ok([receipt_to_dict(r) for r in receipts], total=total, has_more=has_more)


@borrow_bp.get("/receipts/<receipt_id>")
@jwt_required()
def get_receipt(receipt_id: str):
    identity = current_identity()
    try:
        receipt = ReceiptService.get_receipt(identity.user_id, receipt_id)
        return json_ok(receipt_to_dict(receipt), message="Receipt retrieved successfully")
    except ValueError as e:
        return error_response(e)
