from datetime import datetime

from flask import current_app

from toolshed.errors import NotFoundError, ValidationError
from toolshed.models.inventory import InventoryRecord
from toolshed.models.item import Item
from toolshed.repositories.inventory_repo import InventoryRepo
from toolshed.repositories.item_repo import ItemRepo
from toolshed.services.transaction import run_in_transaction

TEXT_FIELDS = ("category", "size", "brand", "coating", "material", "description", "image_url")
FLOAT_FIELDS = ("length", "diameter")
ITEM_STATUSES = ("active", "deleted", "all")
SORT_DIRECTIONS = ("asc", "desc")


def _as_int(data: dict, key: str, default=None):
    value = data.get(key, default)
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValidationError(f"{key} must be an integer")
    if isinstance(value, float) and not value.is_integer():
        raise ValidationError(f"{key} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{key} must be an integer")


def _as_float(data: dict, key: str):
    value = data.get(key)
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{key} must be a number")


def _required_name(data: dict, key: str, label: str):
    value = data.get(key)
    if not isinstance(value, str) or len(value.strip()) < 2:
        raise ValidationError(f"{label} must be at least 2 characters")
    return value.strip()


def _as_text(data: dict, key: str):
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{key} must be a string")
    return value.strip() or None


class InventoryService:
    @staticmethod
    def list_items(page=1, limit=10, search="", type="", category="",
                   sort_by="name", sort_direction="asc", status="active"):
        if status not in ITEM_STATUSES:
            raise ValidationError("status must be one of: active, deleted, all")
        if sort_direction not in SORT_DIRECTIONS:
            raise ValidationError("sort_direction must be 'asc' or 'desc'")
        if page < 1 or limit < 1:
            raise ValidationError("page and limit must be positive")

        limit = min(limit, current_app.config.get("INVENTORY_MAX_PAGE_SIZE", 100))
        offset = (page - 1) * limit
        rows, total = ItemRepo.page(
            offset, limit,
            search=search, type=type, category=category,
            sort_by=sort_by, sort_direction=sort_direction, status=status,
        )
        return rows, total, offset + len(rows) < total

    @staticmethod
    def get_item(item_id: str) -> Item:
        item = ItemRepo.get(item_id)
        if not item:
            raise NotFoundError(f"Item {item_id} not found")
        return item

    @staticmethod
    def get_items(item_ids) -> list:
        if not isinstance(item_ids, list) or not all(isinstance(i, str) for i in item_ids):
            raise ValidationError("item_ids must be a list of strings")
        return ItemRepo.get_many(item_ids)

    @staticmethod
    def create_item(data: dict) -> Item:
        name = _required_name(data, "name", "Name")
        item_type = _required_name(data, "type", "Type")

        total = _as_int(data, "total_quantity")
        if total is None:
            raise ValidationError("total_quantity is required")
        borrowed = _as_int(data, "total_borrowed", 0) or 0
        if total < 0:
            raise ValidationError("Total quantity cannot be negative")
        if borrowed < 0:
            raise ValidationError("Total borrowed cannot be negative")
        if borrowed > total:
            raise ValidationError("Total borrowed cannot exceed total quantity")

        fields = {key: _as_text(data, key) for key in TEXT_FIELDS}
        fields.update({key: _as_float(data, key) for key in FLOAT_FIELDS})
        flute = _as_int(data, "flute")

        def work():
            item = Item(name=name, type=item_type, flute=flute, is_deleted=False, **fields)
            ItemRepo.add(item)
            InventoryRepo.add(InventoryRecord(
                item=item,
                total_quantity=total,
                total_borrowed=borrowed,
                available_quantity=total - borrowed,
                is_deleted=False,
            ))
            return item

        created = run_in_transaction(work, "inventory")
        current_app.logger.info(f"[inventory] created item={created.id} total={total}")
        return created

    @staticmethod
    def edit_item(item_id: str, data: dict) -> Item:
        def work():
            item = ItemRepo.get(item_id)
            if not item or item.is_deleted:
                raise NotFoundError(f"Item {item_id} not found")
            inventory = InventoryRepo.get_by_item_id(item_id)
            if not inventory:
                raise NotFoundError(f"Inventory item with itemId {item_id} not found")

            total = _as_int(data, "total_quantity")
            borrowed = _as_int(data, "total_borrowed")
            if total is not None and total < 0:
                raise ValidationError("Total quantity cannot be negative")
            if borrowed is not None and borrowed < 0:
                raise ValidationError("Total borrowed cannot be negative")

            new_total = inventory.total_quantity if total is None else total
            new_borrowed = inventory.total_borrowed if borrowed is None else borrowed
            if new_borrowed > new_total:
                raise ValidationError("Total borrowed cannot exceed total quantity")

            if "name" in data:
                item.name = _required_name(data, "name", "Name")
            if "type" in data:
                item.type = _required_name(data, "type", "Type")
            for key in TEXT_FIELDS:
                if key in data:
                    setattr(item, key, _as_text(data, key))
            for key in FLOAT_FIELDS:
                if key in data:
                    setattr(item, key, _as_float(data, key))
            if "flute" in data:
                item.flute = _as_int(data, "flute")

            inventory.total_quantity = new_total
            inventory.total_borrowed = new_borrowed
            inventory.available_quantity = new_total - new_borrowed
            return item

        item = run_in_transaction(work, "inventory")
        current_app.logger.info(f"[inventory] updated item={item_id}")
        return item

    @staticmethod
    def _soft_delete(item_id: str, now: datetime):
        item = ItemRepo.get(item_id)
        if not item:
            raise NotFoundError(f"Item {item_id} not found")
        inventory = InventoryRepo.get_by_item_id(item_id)
        if inventory:
            inventory.is_deleted = True
            inventory.deleted_at = now
        item.is_deleted = True
        item.deleted_at = now

    @staticmethod
    def delete_item(item_id: str):
        run_in_transaction(lambda: InventoryService._soft_delete(item_id, datetime.utcnow()), "inventory")
        current_app.logger.info(f"[inventory] soft deleted item={item_id}")

    @staticmethod
    def delete_items(item_ids) -> int:
        if not isinstance(item_ids, list) or not item_ids:
            raise ValidationError("item_ids must be a non-empty list")

        def work():
            now = datetime.utcnow()
            for item_id in item_ids:
                InventoryService._soft_delete(item_id, now)
            return len(item_ids)

        count = run_in_transaction(work, "inventory")
        current_app.logger.info(f"[inventory] soft deleted {count} items")
        return count
