from sqlalchemy import or_

from toolshed.extensions import db
from toolshed.models.item import Item
from toolshed.models.inventory import InventoryRecord


class ItemRepo:
    SORT_COLUMNS = {
        "name": Item.name,
        "type": Item.type,
        "category": Item.category,
        "date": Item.created_at,
        "quantity": InventoryRecord.total_quantity,
    }

    @staticmethod
    def get(item_id: str):
        return db.session.get(Item, item_id)

    @staticmethod
    def get_many(item_ids):
        rows = Item.query.filter(Item.id.in_(item_ids)).all()
        by_id = {row.id: row for row in rows}
        return [by_id[i] for i in item_ids if i in by_id]

    @staticmethod
    def page(offset: int, limit: int, search="", type="", category="",
             sort_by="name", sort_direction="asc", status="active"):
        q = Item.query.outerjoin(InventoryRecord, InventoryRecord.item_id == Item.id)

        if status == "active":
            q = q.filter(Item.is_deleted.is_(False))
        elif status == "deleted":
            q = q.filter(Item.is_deleted.is_(True))

        if search:
            # user input is matched literally, not as LIKE wildcards
            term = search.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
            pattern = f"%{term}%"
            q = q.filter(or_(
                Item.name.ilike(pattern, escape="\\"),
                Item.description.ilike(pattern, escape="\\"),
            ))
        if type:
            q = q.filter(Item.type == type)
        if category:
            q = q.filter(Item.category == category)

        total = q.count()

        column = ItemRepo.SORT_COLUMNS.get(sort_by, Item.name)
        order = column.desc() if sort_direction == "desc" else column.asc()
        rows = q.order_by(order, Item.id.asc()).offset(offset).limit(limit).all()
        return rows, total

    @staticmethod
    def add(item: Item):
        db.session.add(item)
        return item
