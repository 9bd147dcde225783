from datetime import datetime
from uuid import uuid4

from toolshed.extensions import db


class Item(db.Model):
    """Catalog entry of a machine-shop tool. Stock lives in ``InventoryRecord``."""

    __tablename__ = "items"

    id = db.Column(db.String(36), primary_key=True, default=lambda: uuid4().hex)
    name = db.Column(db.String(200), nullable=False, index=True)
    type = db.Column(db.String(50), nullable=False, index=True)  # turning / milling / other
    category = db.Column(db.String(100), nullable=True, index=True)

    size = db.Column(db.String(50), nullable=True)
    length = db.Column(db.Float, nullable=True)
    diameter = db.Column(db.Float, nullable=True)
    flute = db.Column(db.Integer, nullable=True)
    brand = db.Column(db.String(100), nullable=True)
    coating = db.Column(db.String(100), nullable=True)
    material = db.Column(db.String(100), nullable=True)
    description = db.Column(db.Text, nullable=True)
    image_url = db.Column(db.String(500), nullable=True)

    is_deleted = db.Column(db.Boolean, nullable=False, default=False, index=True)
    deleted_at = db.Column(db.DateTime, nullable=True)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    inventory = db.relationship("InventoryRecord", back_populates="item", uselist=False)
