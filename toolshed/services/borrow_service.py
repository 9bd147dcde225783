from datetime import datetime, timezone

from flask import current_app

from toolshed.errors import (
    InsufficientStockError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from toolshed.models.borrow_item import BorrowLineItem
from toolshed.models.receipt import BorrowReceipt
from toolshed.repositories.inventory_repo import InventoryRepo
from toolshed.repositories.item_repo import ItemRepo
from toolshed.repositories.receipt_repo import ReceiptRepo
from toolshed.services.transaction import run_in_transaction


def _is_positive_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _optional_str(data: dict, key: str):
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{key} must be a string")
    value = value.strip()
    return value or None


class BorrowService:
    @staticmethod
    def parse_due_date(value) -> datetime:
        """ISO-8601 string -> naive UTC datetime."""
        if not isinstance(value, str) or not value.strip():
            raise ValidationError("due_date is required")
        try:
            # JS toISOString() ends in Z, which fromisoformat only accepts from 3.11
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            raise ValidationError(f"Invalid due_date: {value}")
        if parsed.tzinfo is not None:
            parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
        return parsed

    @staticmethod
    def validate_cart(data: dict, now: datetime):
        if not isinstance(data, dict):
            raise ValidationError("Checkout data must be an object")
        item_ids = data.get("item_ids")
        quantities = data.get("item_quantities")

        if not isinstance(item_ids, list) or not item_ids:
            raise ValidationError("item_ids must be a non-empty list")
        if not isinstance(quantities, list) or len(quantities) != len(item_ids):
            raise ValidationError("item_quantities must have the same length as item_ids")
        for item_id in item_ids:
            if not isinstance(item_id, str) or not item_id.strip():
                raise ValidationError("item_ids must contain non-empty strings")
        if len(set(item_ids)) != len(item_ids):
            raise ValidationError("item_ids must not contain duplicates")
        for qty in quantities:
            if not _is_positive_int(qty):
                raise ValidationError("item_quantities must be positive integers")

        due_date = BorrowService.parse_due_date(data.get("due_date"))
        if due_date <= now:
            raise ValidationError("due_date must be in the future")

        meta = {key: _optional_str(data, key) for key in ("lecturer", "subject", "notes")}
        return item_ids, quantities, due_date, meta

    @staticmethod
    def generate_receipt_id(user_id: str, now: datetime) -> str:
        # ref-YYMMDD-<user suffix>-NNN, counted per day and suffix
        prefix = f"ref-{now.strftime('%y%m%d')}-{user_id[-4:]}-".lower()
        increment = ReceiptRepo.count_with_prefix(prefix) + 1
        return f"{prefix}{increment:03d}"

    @staticmethod
    def checkout(user_id: str, data: dict, user_email: str | None = None) -> BorrowReceipt:
        if not user_id:
            raise UnauthorizedError()

        item_ids, quantities, due_date, meta = BorrowService.validate_cart(data, datetime.utcnow())

        def work():
            now = datetime.utcnow()
            receipt = BorrowReceipt(
                id=BorrowService.generate_receipt_id(user_id, now),
                user_id=user_id,
                user_email=user_email,
                due_date=due_date,
                return_date=None,
                status="active",
                created_at=now,
                updated_at=now,
                **meta,
            )

            for position, (item_id, qty) in enumerate(zip(item_ids, quantities)):
                item = ItemRepo.get(item_id)
                if not item or item.is_deleted:
                    raise NotFoundError(f"Item {item_id} not found")

                inventory = InventoryRepo.get_by_item_id(item_id, for_update=True)
                if not inventory or inventory.is_deleted:
                    raise NotFoundError(f"Inventory item with itemId {item_id} not found")

                if qty > inventory.available_quantity:
                    raise InsufficientStockError(f"Not enough quantity available for item {item_id}")

                inventory.total_borrowed += qty
                inventory.available_quantity -= qty

                receipt.lines.append(BorrowLineItem(
                    user_id=user_id,
                    item_id=item_id,
                    position=position,
                    quantity=qty,
                    returned_quantity=0,
                    status="active",
                ))

            ReceiptRepo.add(receipt)
            return receipt

        try:
            receipt = run_in_transaction(work, "checkout")
        except ValueError as e:
            current_app.logger.warning(f"[checkout] rejected for user={user_id}: {e}")
            raise

        current_app.logger.info(
            f"[checkout] receipt={receipt.id} user={user_id} items={len(item_ids)} units={sum(quantities)}"
        )
        return receipt
