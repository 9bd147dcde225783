from datetime import datetime

from toolshed.extensions import db
from toolshed.models.receipt import BorrowReceipt


class ReceiptRepo:
    @staticmethod
    def get(receipt_id: str):
        return db.session.get(BorrowReceipt, receipt_id)

    @staticmethod
    def list_by_user(user_id: str, status: str | None = None):
        q = BorrowReceipt.query.filter_by(user_id=user_id)
        if status:
            q = q.filter_by(status=status)
        return q.order_by(BorrowReceipt.created_at.desc(), BorrowReceipt.id.desc()).all()

    @staticmethod
    def page(offset: int, limit: int):
        q = BorrowReceipt.query
        total = q.count()
        rows = (
            q.order_by(BorrowReceipt.created_at.desc(), BorrowReceipt.id.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )
        return rows, total

    @staticmethod
    def count_with_prefix(prefix: str) -> int:
        return BorrowReceipt.query.filter(BorrowReceipt.id.startswith(prefix)).count()

    @staticmethod
    def find_overdue(now: datetime):
        return BorrowReceipt.query.filter(
            BorrowReceipt.status == "active",
            BorrowReceipt.due_date < now,
        ).all()

    @staticmethod
    def find_due_between(start: datetime, end: datetime):
        return BorrowReceipt.query.filter(
            BorrowReceipt.status == "active",
            BorrowReceipt.due_date >= start,
            BorrowReceipt.due_date <= end,
        ).all()

    @staticmethod
    def add(receipt: BorrowReceipt):
        db.session.add(receipt)
        return receipt
