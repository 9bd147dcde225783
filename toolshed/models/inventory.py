from uuid import uuid4

from toolshed.extensions import db


class InventoryRecord(db.Model):
    __tablename__ = "inventory"

    id = db.Column(db.String(36), primary_key=True, default=lambda: uuid4().hex)
    item_id = db.Column(db.String(36), db.ForeignKey("items.id"), unique=True, nullable=False, index=True)

    total_quantity = db.Column(db.Integer, nullable=False, default=0)
    total_borrowed = db.Column(db.Integer, nullable=False, default=0)
    available_quantity = db.Column(db.Integer, nullable=False, default=0)

    is_deleted = db.Column(db.Boolean, nullable=False, default=False)
    deleted_at = db.Column(db.DateTime, nullable=True)

    version = db.Column(db.Integer, nullable=False)

    item = db.relationship("Item", back_populates="inventory")

    __table_args__ = (
        db.CheckConstraint("total_quantity >= 0", name="ck_inventory_total_non_negative"),
        db.CheckConstraint("total_borrowed >= 0", name="ck_inventory_borrowed_non_negative"),
        db.CheckConstraint("available_quantity >= 0", name="ck_inventory_available_non_negative"),
        db.CheckConstraint(
            "total_borrowed + available_quantity = total_quantity",
            name="ck_inventory_conservation",
        ),
    )
    __mapper_args__ = {"version_id_col": version}

    def snapshot(self) -> dict:
        return {
            "total_borrowed": self.total_borrowed,
            "available_quantity": self.available_quantity,
        }
