from toolshed.extensions import db
from toolshed.models.return_condition import ItemReturnCondition


class ReturnConditionRepo:
    @staticmethod
    def add(entry: ItemReturnCondition):
        db.session.add(entry)
        return entry

    @staticmethod
    def list_for_receipt(receipt_id: str, user_id: str):
        return (
            ItemReturnCondition.query.filter_by(receipt_id=receipt_id, user_id=user_id)
            .order_by(ItemReturnCondition.created_at.asc(), ItemReturnCondition.id.asc())
            .all()
        )
