from typing import Any, Dict, List

# a cart line is a plain value: product_id, name, quantity, price (unit price at add time)
CartLine = Dict[str, Any]


def cart_total(items: List[CartLine]) -> float:
    return round(sum(line["price"] * line["quantity"] for line in items), 2)


def find_line(items: List[CartLine], product_id: int) -> int:
    for idx, line in enumerate(items):
        if line["product_id"] == product_id:
            return idx
    return -1


def add_line(items: List[CartLine], product_id: int, name: str, price: float, quantity: int) -> List[CartLine]:
    """Return a new list with ``quantity`` more of the product.

    An existing line keeps the price it was added at; a new line takes ``price``.
    """
    new_items = [dict(line) for line in items]
    idx = find_line(new_items, product_id)
    if idx > -1:
        new_items[idx]["quantity"] += quantity
    else:
        new_items.append({"product_id": product_id, "name": name, "quantity": quantity, "price": price})
    return new_items


def set_line_quantity(items: List[CartLine], idx: int, quantity: int) -> List[CartLine]:
    new_items = [dict(line) for line in items]
    if quantity <= 0:
        del new_items[idx]
    else:
        new_items[idx]["quantity"] = quantity
    return new_items


def serialize_cart(cart) -> Dict[str, Any]:
    if cart is None:
        return {"id": None, "items": [], "total_amount": 0, "item_count": 0}
    return {
        "id": cart.id,
        "items": cart.items,
        "total_amount": cart.total_amount,
        "item_count": sum(line["quantity"] for line in cart.items),
        "updated_at": cart.updated_at,
    }
