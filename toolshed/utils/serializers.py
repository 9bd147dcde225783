def _iso(value):
    return value.isoformat() if value else None


def inventory_to_dict(inventory):
    if not inventory:
        return {"total_quantity": 0, "total_borrowed": 0, "available_quantity": 0}
    return {
        "total_quantity": inventory.total_quantity,
        "total_borrowed": inventory.total_borrowed,
        "available_quantity": inventory.available_quantity,
    }


def item_to_dict(item, with_inventory=True):
    data = {
        "id": item.id,
        "name": item.name,
        "type": item.type,
        "category": item.category,
        "size": item.size,
        "length": item.length,
        "diameter": item.diameter,
        "flute": item.flute,
        "brand": item.brand,
        "coating": item.coating,
        "material": item.material,
        "description": item.description,
        "image_url": item.image_url,
        "is_deleted": bool(item.is_deleted),
        "created_at": _iso(item.created_at),
    }
    if with_inventory:
        data["inventory"] = inventory_to_dict(item.inventory)
    return data


def line_to_dict(line):
    return {
        "id": line.id,
        "item_id": line.item_id,
        "quantity": line.quantity,
        "returned_quantity": line.returned_quantity,
        "status": line.status,
        "returned_at": _iso(line.returned_at),
    }


def receipt_to_dict(receipt):
    return {
        "id": receipt.id,
        "user_id": receipt.user_id,
        "item_ids": receipt.item_ids,
        "item_quantities": receipt.item_quantities,
        "returned_quantities": receipt.returned_quantities,
        "lines": [line_to_dict(line) for line in receipt.lines],
        "status": receipt.status,
        "due_date": _iso(receipt.due_date),
        "return_date": _iso(receipt.return_date),
        "subject": receipt.subject,
        "lecturer": receipt.lecturer,
        "notes": receipt.notes,
        "created_at": _iso(receipt.created_at),
    }


def condition_to_dict(row):
    return {
        "id": row.id,
        "receipt_id": row.receipt_id,
        "item_id": row.item_id,
        "user_id": row.user_id,
        "condition": row.condition,
        "quantity": row.quantity,
        "notes": row.notes,
        "created_at": _iso(row.created_at),
    }
