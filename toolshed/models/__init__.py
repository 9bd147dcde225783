from toolshed.models.item import Item
from toolshed.models.inventory import InventoryRecord
from toolshed.models.receipt import BorrowReceipt, RECEIPT_STATUSES
from toolshed.models.borrow_item import BorrowLineItem
from toolshed.models.return_condition import ItemReturnCondition, RETURN_CONDITIONS
from toolshed.models.notification_log import NotificationLog

__all__ = [
    "Item",
    "InventoryRecord",
    "BorrowReceipt",
    "BorrowLineItem",
    "ItemReturnCondition",
    "NotificationLog",
    "RECEIPT_STATUSES",
    "RETURN_CONDITIONS",
]
