from datetime import datetime

from flask import current_app

from toolshed.errors import (
    InvalidInventoryStateError,
    NotFoundError,
    QuantityExceededError,
    UnauthorizedError,
    ValidationError,
)
from toolshed.models.return_condition import ItemReturnCondition, RETURN_CONDITIONS
from toolshed.repositories.borrow_item_repo import BorrowItemRepo
from toolshed.repositories.inventory_repo import InventoryRepo
from toolshed.repositories.receipt_repo import ReceiptRepo
from toolshed.repositories.return_condition_repo import ReturnConditionRepo
from toolshed.services.transaction import run_in_transaction


class ReturnService:
    @staticmethod
    def validate_request(request) -> list:
        if not isinstance(request, list) or not request:
            raise ValidationError("At least one item must be returned")

        lines = []
        for entry in request:
            if not isinstance(entry, dict):
                raise ValidationError("Each return line must be an object")

            item_id = entry.get("item_id")
            quantity = entry.get("quantity")
            condition = entry.get("condition")
            notes = entry.get("notes")

            if not isinstance(item_id, str) or not item_id.strip():
                raise ValidationError("item_id is required")
            if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity <= 0:
                raise ValidationError(f"quantity must be a positive integer for itemId {item_id}")
            if condition not in RETURN_CONDITIONS:
                raise ValidationError(f"condition must be one of: {', '.join(RETURN_CONDITIONS)}")
            if notes is not None and not isinstance(notes, str):
                raise ValidationError("notes must be a string")

            lines.append({
                "item_id": item_id,
                "quantity": quantity,
                "condition": condition,
                "notes": notes or None,
            })
        return lines

    @staticmethod
    def _apply_line(receipt, user_id: str, entry: dict, now: datetime) -> dict:
        item_id = entry["item_id"]
        quantity = entry["quantity"]

        line = BorrowItemRepo.get_for_receipt_item(receipt.id, item_id)
        if not line:
            raise NotFoundError(f"Borrow item with receiptId {receipt.id} and itemId {item_id} not found")

        new_returned = line.returned_quantity + quantity
        remaining = line.quantity - new_returned
        if remaining < 0:
            raise QuantityExceededError(f"Return quantity exceeds borrowed quantity for itemId {item_id}")

        inventory = InventoryRepo.get_by_item_id(item_id)
        if not inventory:
            raise NotFoundError(f"Inventory item with itemId {item_id} not found")

        new_borrowed = inventory.total_borrowed - quantity
        new_available = inventory.available_quantity + quantity
        if new_borrowed < 0 or new_available > inventory.total_quantity:
            raise InvalidInventoryStateError()

        update = {
            "borrow_id": line.id,
            "item_id": item_id,
            "previous_data": line.snapshot(),
            "inventory_id": inventory.id,
            "previous_inventory": inventory.snapshot(),
        }

        line.returned_quantity = new_returned
        if remaining == 0:
            line.status = "returned"
            line.returned_at = now

        ReturnConditionRepo.add(ItemReturnCondition(
            receipt_id=receipt.id,
            item_id=item_id,
            user_id=user_id,
            condition=entry["condition"],
            quantity=quantity,
            notes=entry["notes"],
            created_at=now,
        ))

        inventory.total_borrowed = new_borrowed
        inventory.available_quantity = new_available
        return update

    @staticmethod
    def return_items(user_id: str, receipt_id: str, request) -> list:
        """Return one or more lines of a receipt in a single transaction.

        Lines are applied in request order. The result is the journal of
        pre-update snapshots, one entry per processed line; nothing is written
        when any line fails.
        """
        if not user_id:
            raise UnauthorizedError()

        lines = ReturnService.validate_request(request)

        def work():
            now = datetime.utcnow()

            receipt = ReceiptRepo.get(receipt_id)
            if not receipt:
                raise NotFoundError(f"Receipt {receipt_id} not found")
            if receipt.user_id != user_id:
                raise UnauthorizedError("Unauthorized to return items from this receipt")

            journal = [ReturnService._apply_line(receipt, user_id, entry, now) for entry in lines]

            all_lines = BorrowItemRepo.list_by_receipt(receipt.id)
            if all(line.outstanding == 0 for line in all_lines):
                receipt.status = "returned"
                receipt.return_date = now

            # bumps the receipt version even for partial returns
            receipt.updated_at = now
            return journal

        try:
            journal = run_in_transaction(work, "return")
        except ValueError as e:
            current_app.logger.warning(f"[return] rejected receipt={receipt_id} user={user_id}: {e}")
            raise

        current_app.logger.info(
            f"[return] receipt={receipt_id} user={user_id} lines={len(journal)} "
            f"units={sum(entry['quantity'] for entry in lines)}"
        )
        return journal

    @staticmethod
    def get_return_conditions(user_id: str, receipt_id: str):
        if not user_id:
            raise UnauthorizedError()
        return ReturnConditionRepo.list_for_receipt(receipt_id, user_id)
