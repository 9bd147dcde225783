from uuid import uuid4

from toolshed.extensions import db


class BorrowLineItem(db.Model):
    __tablename__ = "borrow_items"

    id = db.Column(db.String(36), primary_key=True, default=lambda: uuid4().hex)
    receipt_id = db.Column(db.String(40), db.ForeignKey("borrow_receipts.id"), nullable=False, index=True)
    user_id = db.Column(db.String(64), nullable=False, index=True)
    item_id = db.Column(db.String(36), db.ForeignKey("items.id"), nullable=False, index=True)
    position = db.Column(db.Integer, nullable=False, default=0)

    quantity = db.Column(db.Integer, nullable=False)
    returned_quantity = db.Column(db.Integer, nullable=False, default=0)

    status = db.Column(db.String(20), nullable=False, default="active")  # active/returned
    returned_at = db.Column(db.DateTime, nullable=True)

    version = db.Column(db.Integer, nullable=False)

    receipt = db.relationship("BorrowReceipt", back_populates="lines")
    item = db.relationship("Item")

    __table_args__ = (
        db.UniqueConstraint("receipt_id", "item_id", name="uq_borrow_item_receipt_item"),
        db.CheckConstraint("quantity > 0", name="ck_borrow_item_quantity_positive"),
        db.CheckConstraint(
            "returned_quantity >= 0 AND returned_quantity <= quantity",
            name="ck_borrow_item_returned_range",
        ),
    )
    __mapper_args__ = {"version_id_col": version}

    @property
    def outstanding(self) -> int:
        return self.quantity - self.returned_quantity

    def snapshot(self) -> dict:
        return {
            "status": self.status,
            "returned_at": self.returned_at.isoformat() if self.returned_at else None,
            "quantity": self.quantity,
            "returned_quantity": self.returned_quantity,
        }
