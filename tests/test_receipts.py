import pytest

from toolshed.errors import NotFoundError, UnauthorizedError, ValidationError
from toolshed.services.borrow_service import BorrowService
from toolshed.services.receipt_service import ReceiptService
from toolshed.services.return_service import ReturnService


@pytest.fixture
def receipts(make_item, due_date):
    mill = make_item(total=20)

    def checkout(user_id, qty=1):
        return BorrowService.checkout(
            user_id, {"item_ids": [mill], "item_quantities": [qty], "due_date": due_date}
        ).id

    first = checkout("student-0001")
    second = checkout("student-0001", 2)
    other = checkout("student-0002")
    ReturnService.return_items(
        "student-0001", first, [{"item_id": mill, "quantity": 1, "condition": "good"}]
    )
    return {"returned": first, "active": second, "other": other}


def test_owner_can_read_receipt(receipts):
    receipt = ReceiptService.get_receipt("student-0001", receipts["active"])
    assert receipt.item_quantities == [2]
    assert receipt.status == "active"


def test_receipt_of_another_user_is_unauthorized(receipts):
    with pytest.raises(UnauthorizedError):
        ReceiptService.get_receipt("student-0001", receipts["other"])


def test_unknown_receipt_is_not_found(receipts):
    with pytest.raises(NotFoundError):
        ReceiptService.get_receipt("student-0001", "ref-000000-0001-999")


def test_receipts_are_listed_per_user_and_status(receipts):
    ids = {r.id for r in ReceiptService.get_receipts("student-0001")}
    assert ids == {receipts["returned"], receipts["active"]}

    active = ReceiptService.get_receipts("student-0001", "active")
    assert [r.id for r in active] == [receipts["active"]]
    returned = ReceiptService.get_receipts("student-0001", "returned")
    assert [r.id for r in returned] == [receipts["returned"]]

    assert ReceiptService.get_receipts("student-0003") == []


def test_unknown_status_filter_is_rejected(receipts):
    with pytest.raises(ValidationError):
        ReceiptService.get_receipts("student-0001", "overdue")


def test_all_receipts_are_paginated(receipts):
    rows, total, has_more = ReceiptService.list_all_receipts(page=1, limit=2)
    assert (len(rows), total, has_more) == (2, 3, True)

    rows, total, has_more = ReceiptService.list_all_receipts(page=2, limit=2)
    assert (len(rows), total, has_more) == (1, 3, False)

    with pytest.raises(ValidationError):
        ReceiptService.list_all_receipts(page=0)
