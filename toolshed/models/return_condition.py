from datetime import datetime
from uuid import uuid4

from toolshed.extensions import db

RETURN_CONDITIONS = ("good", "damaged_or_broken", "lost", "missing")


class ItemReturnCondition(db.Model):
    """Append-only log: one row per returned line per return event."""

    __tablename__ = "item_return_conditions"

    id = db.Column(db.String(36), primary_key=True, default=lambda: uuid4().hex)
    receipt_id = db.Column(db.String(40), db.ForeignKey("borrow_receipts.id"), nullable=False, index=True)
    item_id = db.Column(db.String(36), db.ForeignKey("items.id"), nullable=False, index=True)
    user_id = db.Column(db.String(64), nullable=False, index=True)

    condition = db.Column(db.String(30), nullable=False)
    quantity = db.Column(db.Integer, nullable=False)
    notes = db.Column(db.Text, nullable=True)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    __table_args__ = (
        db.CheckConstraint(
            "condition IN ('good', 'damaged_or_broken', 'lost', 'missing')",
            name="ck_return_condition_value",
        ),
        db.CheckConstraint("quantity > 0", name="ck_return_condition_quantity_positive"),
    )
