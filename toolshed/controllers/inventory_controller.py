# toolshed/controllers/inventory_controller.py

from flask import Blueprint, request
from flask_jwt_extended import jwt_required

from toolshed.services.inventory_service import InventoryService
from toolshed.utils.auth import current_identity, is_admin
from toolshed.utils.decorators import admin_required
from toolshed.utils.responses import error_response, json_error, json_ok
from toolshed.utils.serializers import item_to_dict

inventory_bp = Blueprint("inventory", __name__)


@inventory_bp.get("/")
@jwt_required()
def list_items():
    status = request.args.get("status", "active")
    if status != "active" and not is_admin(current_identity()):
        return json_error("Requires admin privileges", 403)

    try:
        items, total, has_more = InventoryService.list_items(
            page=request.args.get("page", 1, type=int),
            limit=request.args.get("limit", 10, type=int),
            search=request.args.get("search", ""),
            type=request.args.get("type", ""),
            category=request.args.get("category", ""),
            sort_by=request.args.get("sort_by", "name"),
            sort_direction=request.args.get("sort_direction", "asc"),
            status=status,
        )
    except ValueError as e:
        return error_response(e)

    return json_ok([item_to_dict(i) for i in items], total=total, has_more=has_more)


@inventory_bp.get("/<item_id>")
@jwt_required()
def get_item(item_id: str):
    try:
        item = InventoryService.get_item(item_id)
        return json_ok(item_to_dict(item), message="Item retrieved successfully")
    except ValueError as e:
        return error_response(e)


@inventory_bp.post("/lookup")
@jwt_required()
def lookup_items():
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return json_error("Request body must be a JSON object")
    try:
        items = InventoryService.get_items(data.get("item_ids"))
        return json_ok([item_to_dict(i, with_inventory=False) for i in items])
    except ValueError as e:
        return error_response(e)


@inventory_bp.post("/")
@admin_required
def create_item():
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return json_error("Request body must be a JSON object")
    try:
        item = InventoryService.create_item(data)
        return json_ok(item_to_dict(item), message="Item created successfully", code=201)
    except ValueError as e:
        return error_response(e)


@inventory_bp.put("/<item_id>")
@admin_required
def edit_item(item_id: str):
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return json_error("Request body must be a JSON object")
    try:
        item = InventoryService.edit_item(item_id, data)
        return json_ok(item_to_dict(item), message="Item updated successfully")
    except ValueError as e:
        return error_response(e)


@inventory_bp.delete("/<item_id>")
@admin_required
def delete_item(item_id: str):
    try:
        InventoryService.delete_item(item_id)
        return json_ok(message="Item soft deleted successfully")
    except ValueError as e:
        return error_response(e)


@inventory_bp.post("/bulk-delete")
@admin_required
def delete_items():
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return json_error("Request body must be a JSON object")
    try:
        count = InventoryService.delete_items(data.get("item_ids"))
        return json_ok(message=f"Successfully soft deleted {count} items")
    except ValueError as e:
        return error_response(e)
