from toolshed.extensions import db
from toolshed.models.inventory import InventoryRecord


class InventoryRepo:
    @staticmethod
    def get_by_item_id(item_id: str, for_update: bool = False):
        q = InventoryRecord.query.filter_by(item_id=item_id)
        if for_update:
            q = q.with_for_update()
        return q.first()

    @staticmethod
    def add(record: InventoryRecord):
        db.session.add(record)
        return record
