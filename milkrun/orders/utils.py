import secrets
import string
import time
from typing import Any, Dict, List

_ORDER_SUFFIX_ALPHABET = string.ascii_uppercase + string.digits


def generate_order_number() -> str:
    """ORD + epoch millis + 5 random upper-case alphanumerics."""
    suffix = "".join(secrets.choice(_ORDER_SUFFIX_ALPHABET) for _ in range(5))
    return f"ORD{int(time.time() * 1000)}{suffix}"


def snapshot_items(cart_items: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    # frozen copy; later product or cart edits never reach the order
    return [
        {
            "product_id": line["product_id"],
            "name": line["name"],
            "quantity": line["quantity"],
            "price": line["price"],
            "total_price": round(line["price"] * line["quantity"], 2),
        }
        for line in cart_items
    ]
