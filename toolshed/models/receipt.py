from datetime import datetime

from toolshed.extensions import db

RECEIPT_STATUSES = ("active", "returned")


class BorrowReceipt(db.Model):
    """One checkout transaction.

    The borrowed items are the ordered ``lines``; ``item_ids``,
    ``item_quantities`` and ``returned_quantities`` are read-only views over
    them kept for callers that expect the flat receipt layout.
    """

    __tablename__ = "borrow_receipts"

    id = db.Column(db.String(40), primary_key=True)  # ref-YYMMDD-xxxx-NNN
    user_id = db.Column(db.String(64), nullable=False, index=True)
    user_email = db.Column(db.String(255), nullable=True)

    due_date = db.Column(db.DateTime, nullable=False, index=True)
    return_date = db.Column(db.DateTime, nullable=True)
    status = db.Column(db.String(20), nullable=False, default="active", index=True)  # active/returned

    subject = db.Column(db.String(200), nullable=True)
    lecturer = db.Column(db.String(200), nullable=True)
    notes = db.Column(db.Text, nullable=True)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    version = db.Column(db.Integer, nullable=False)

    lines = db.relationship(
        "BorrowLineItem",
        back_populates="receipt",
        order_by="BorrowLineItem.position",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        db.CheckConstraint("status IN ('active', 'returned')", name="ck_receipt_status"),
    )
    __mapper_args__ = {"version_id_col": version}

    @property
    def item_ids(self):
        return [line.item_id for line in self.lines]

    @property
    def item_quantities(self):
        return [line.quantity for line in self.lines]

    @property
    def returned_quantities(self):
        return [line.returned_quantity for line in self.lines]
