"""
Canonical product record.
Everything in the catalog depends on this shape.
"""
import math
from dataclasses import dataclass, replace
from datetime import date
from typing import Any, Dict, Optional

from catalog.errors import ValidationError

REQUIRED_FIELDS = ("name", "category", "price", "quantity", "status")
TEXT_FIELDS = ("name", "category", "status")


@dataclass(frozen=True)
class Product:
    """
    A single catalog entry.
    Stores hand out Product instances, never their internal dicts.
    """
    id: int
    name: str
    category: str
    price: float
    quantity: int
    status: str
    date: str

    @property
    def value(self) -> float:
        """Stock value of this product (price x quantity)."""
        return self.price * self.quantity

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "price": self.price,
            "quantity": self.quantity,
            "status": self.status,
            "date": self.date
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Product":
        """Rebuild a stored record (file store document, seed rows)."""
        try:
            return cls(
                id=int(data["id"]),
                name=str(data["name"]),
                category=str(data["category"]),
                price=float(data["price"]),
                quantity=int(data["quantity"]),
                status=str(data["status"]),
                date=date.fromisoformat(str(data["date"])).isoformat()
            )
        except (KeyError, ValueError, TypeError) as e:
            raise ValidationError(f"Malformed product record: {e}") from e

    @classmethod
    def from_draft(cls, draft: Dict[str, Any], product_id: int,
                   created: Optional[date] = None) -> "Product":
        """
        Build a new product from client-supplied data.

        Raises:
            ValidationError: If a required field is missing or malformed
        """
        if not isinstance(draft, dict):
            raise ValidationError("Product data must be a JSON object")

        missing = [
            name for name in REQUIRED_FIELDS
            if draft.get(name) is None or (name in TEXT_FIELDS and draft.get(name) == "")
        ]
        if missing:
            raise ValidationError(
                "Missing required fields: name, category, price, quantity, status"
            )

        return cls(
            id=product_id,
            name=_clean_text(draft["name"], "name"),
            category=_clean_text(draft["category"], "category"),
            price=_parse_price(draft["price"]),
            quantity=_parse_quantity(draft["quantity"]),
            status=_clean_text(draft["status"], "status"),
            date=(created or date.today()).isoformat()
        )

    def apply_patch(self, partial: Dict[str, Any]) -> "Product":
        """
        Merge supplied fields over this record.

        Unknown keys, including id and date, are ignored. Empty text
        values count as not supplied.
        """
        if not isinstance(partial, dict):
            raise ValidationError("Product data must be a JSON object")

        changes: Dict[str, Any] = {}
        for name in TEXT_FIELDS:
            raw = partial.get(name)
            if raw is None or raw == "":
                continue
            changes[name] = _clean_text(raw, name)

        if partial.get("price") is not None:
            changes["price"] = _parse_price(partial["price"])
        if partial.get("quantity") is not None:
            changes["quantity"] = _parse_quantity(partial["quantity"])

        return replace(self, **changes) if changes else self


def _clean_text(raw: Any, field_name: str) -> str:
    if not isinstance(raw, str):
        raise ValidationError(f"Field '{field_name}' must be a string")
    text = raw.strip()
    if not text:
        raise ValidationError(f"Field '{field_name}' must not be empty")
    return text


def _parse_price(raw: Any) -> float:
    if isinstance(raw, bool):
        raise ValidationError("Field 'price' must be a number")
    try:
        price = float(raw)
    except (TypeError, ValueError):
        raise ValidationError("Field 'price' must be a number")
    if math.isnan(price) or math.isinf(price) or price < 0:
        raise ValidationError("Field 'price' must be a non-negative number")
    return price


def _parse_quantity(raw: Any) -> int:
    if isinstance(raw, bool):
        raise ValidationError("Field 'quantity' must be an integer")
    try:
        if isinstance(raw, float):
            if not raw.is_integer():
                raise ValueError(raw)
            quantity = int(raw)
        else:
            quantity = int(str(raw).strip())
    except (TypeError, ValueError):
        raise ValidationError("Field 'quantity' must be an integer")
    if quantity < 0:
        raise ValidationError("Field 'quantity' must not be negative")
    return quantity
