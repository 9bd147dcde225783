from toolshed.errors import NotFoundError, UnauthorizedError, ValidationError
from toolshed.models.receipt import RECEIPT_STATUSES
from toolshed.repositories.receipt_repo import ReceiptRepo


class ReceiptService:
    @staticmethod
    def get_receipt(user_id: str, receipt_id: str):
        if not user_id:
            raise UnauthorizedError()

        receipt = ReceiptRepo.get(receipt_id)
        if not receipt:
            raise NotFoundError(f"Receipt {receipt_id} not found")
        if receipt.user_id != user_id:
            raise UnauthorizedError("Unauthorized to access this receipt")
        return receipt

    @staticmethod
    def get_receipts(user_id: str, status: str | None = None):
        if not user_id:
            raise UnauthorizedError()
        if status and status not in RECEIPT_STATUSES:
            raise ValidationError("status must be 'active' or 'returned'")
        return ReceiptRepo.list_by_user(user_id, status or None)

    @staticmethod
    def list_all_receipts(page: int = 1, limit: int = 10):
        if page < 1 or limit < 1:
            raise ValidationError("page and limit must be positive")
        offset = (page - 1) * limit
        rows, total = ReceiptRepo.page(offset, limit)
        return rows, total, offset + len(rows) < total
