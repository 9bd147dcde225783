from toolshed.models.borrow_item import BorrowLineItem


class BorrowItemRepo:
    @staticmethod
    def get_for_receipt_item(receipt_id: str, item_id: str):
        return BorrowLineItem.query.filter_by(receipt_id=receipt_id, item_id=item_id).first()

    @staticmethod
    def list_by_receipt(receipt_id: str):
        return (
            BorrowLineItem.query.filter_by(receipt_id=receipt_id)
            .order_by(BorrowLineItem.position.asc())
            .all()
        )
