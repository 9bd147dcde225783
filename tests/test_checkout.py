"""Checkout workflow: cart validation, stock reservation and receipt creation."""
from datetime import datetime, timedelta

import pytest

from toolshed.errors import InsufficientStockError, NotFoundError, UnauthorizedError, ValidationError
from toolshed.repositories.inventory_repo import InventoryRepo
from toolshed.repositories.receipt_repo import ReceiptRepo
from toolshed.services.borrow_service import BorrowService
from toolshed.services.inventory_service import InventoryService


def _cart(item_ids, quantities, due_date, **extra):
    data = {"item_ids": item_ids, "item_quantities": quantities, "due_date": due_date}
    data.update(extra)
    return data


def test_checkout_reserves_inventory_and_creates_lines(make_item, due_date):
    mill = make_item("Flat end mill 6mm", total=10)
    insert = make_item("Turning insert CNMG", total=5)

    receipt = BorrowService.checkout(
        "student-0001",
        _cart([mill, insert], [3, 2], due_date, lecturer="Dr. Lim", subject="Machining 101"),
    )

    assert receipt.status == "active"
    assert receipt.return_date is None
    assert receipt.item_ids == [mill, insert]
    assert receipt.item_quantities == [3, 2]
    assert receipt.returned_quantities == [0, 0]
    assert receipt.lecturer == "Dr. Lim"
    assert all(line.status == "active" for line in receipt.lines)

    inv = InventoryRepo.get_by_item_id(mill)
    assert (inv.total_quantity, inv.total_borrowed, inv.available_quantity) == (10, 3, 7)
    inv = InventoryRepo.get_by_item_id(insert)
    assert (inv.total_quantity, inv.total_borrowed, inv.available_quantity) == (5, 2, 3)


def test_receipt_ids_follow_reference_format(make_item, due_date):
    mill = make_item(total=10)

    first = BorrowService.checkout("student-ABCD", _cart([mill], [1], due_date))
    second = BorrowService.checkout("student-ABCD", _cart([mill], [1], due_date))

    today = datetime.utcnow().strftime("%y%m%d")
    assert first.id == f"ref-{today}-abcd-001"
    assert second.id == f"ref-{today}-abcd-002"


def test_insufficient_stock_leaves_everything_untouched(make_item, due_date):
    mill = make_item("Mill", total=10)
    drill = make_item("Drill", total=2)

    with pytest.raises(InsufficientStockError):
        BorrowService.checkout("student-0001", _cart([mill, drill], [4, 3], due_date))

    inv = InventoryRepo.get_by_item_id(mill)
    assert (inv.total_borrowed, inv.available_quantity) == (0, 10)
    assert ReceiptRepo.list_by_user("student-0001") == []


def test_unknown_or_deleted_item_is_not_found(make_item, due_date):
    mill = make_item(total=10)
    InventoryService.delete_item(mill)

    with pytest.raises(NotFoundError):
        BorrowService.checkout("student-0001", _cart(["missing"], [1], due_date))
    with pytest.raises(NotFoundError):
        BorrowService.checkout("student-0001", _cart([mill], [1], due_date))


@pytest.mark.parametrize("item_ids, quantities", [
    ([], []),
    (["a"], [1, 2]),
    (["a", "a"], [1, 1]),
    (["a"], [0]),
    (["a"], [-2]),
    (["a"], [True]),
    (["a"], ["3"]),
    ([""], [1]),
])
def test_invalid_carts_are_rejected(app, due_date, item_ids, quantities):
    with pytest.raises(ValidationError):
        BorrowService.checkout("student-0001", _cart(item_ids, quantities, due_date))


def test_due_date_must_be_parseable_and_in_the_future(make_item):
    mill = make_item(total=10)
    past = (datetime.utcnow() - timedelta(days=1)).isoformat()

    with pytest.raises(ValidationError):
        BorrowService.checkout("student-0001", _cart([mill], [1], "next tuesday"))
    with pytest.raises(ValidationError):
        BorrowService.checkout("student-0001", _cart([mill], [1], past))
    with pytest.raises(ValidationError):
        BorrowService.checkout("student-0001", {"item_ids": [mill], "item_quantities": [1]})


def test_due_date_with_offset_is_stored_as_utc(app):
    parsed = BorrowService.parse_due_date("2031-03-01T10:00:00+02:00")
    assert parsed == datetime(2031, 3, 1, 8, 0, 0)
    assert parsed.tzinfo is None


def test_checkout_requires_identity(make_item, due_date):
    mill = make_item(total=10)
    with pytest.raises(UnauthorizedError):
        BorrowService.checkout("", _cart([mill], [1], due_date))


def test_due_date_in_javascript_iso_format_is_accepted(app):
    parsed = BorrowService.parse_due_date("2031-03-01T08:00:00.000Z")
    assert parsed == datetime(2031, 3, 1, 8, 0, 0)
    assert parsed.tzinfo is None


def test_checkout_data_must_be_an_object(app):
    with pytest.raises(ValidationError):
        BorrowService.checkout("student-0001", ["a"])
