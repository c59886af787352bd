"""
Input checks for the products endpoints.

Creation payloads are checked against an ordered list of rules. Every rule
that fails contributes one message; the caller gets all of them at once.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, List, Mapping, Optional

from products_api.errors import ValidationError
from products_api.schemas import ProductCreate

NAME_MAX_LENGTH = 255

# products.price is numeric(10, 2)
PRICE_STEP = Decimal("0.01")

# products.id is a 32-bit INTEGER
MAX_PRODUCT_ID = 2**31 - 1

INVALID_ID_MESSAGE = "the id must be a positive number"


@dataclass(frozen=True)
class Rule:
    field: str
    check: Callable[[Any], bool]
    message: str
    # A presence rule stops the remaining rules of its field when it fails.
    required: bool = False


def _is_text(value: Any) -> bool:
    return isinstance(value, str)


def _name_length_ok(value: str) -> bool:
    return 1 <= len(value.strip()) <= NAME_MAX_LENGTH


def _not_blank(value: str) -> bool:
    return len(value.strip()) > 0


def _to_decimal(value: Any) -> Optional[Decimal]:
    # bool is an int subclass; true/false is not a price.
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        raw = str(value)
    elif isinstance(value, str):
        raw = value.strip()
    else:
        return None
    try:
        number = Decimal(raw)
    except InvalidOperation:
        return None
    if not number.is_finite():
        return None
    return number


def _is_positive_decimal(value: Any) -> bool:
    number = _to_decimal(value)
    return number is not None and number > 0


def _fits_price_scale(value: Any) -> bool:
    number = _to_decimal(value)
    # Non-numbers and non-positive values are reported by _is_positive_decimal.
    if number is None or number <= 0:
        return True
    try:
        return number == number.quantize(PRICE_STEP)
    except InvalidOperation:
        return False


PRODUCT_CREATE_RULES: List[Rule] = [
    Rule("name", _is_text, "the 'name' field is required", required=True),
    Rule("name", _name_length_ok, f"the name must be between 1 and {NAME_MAX_LENGTH} characters"),
    Rule("description", _is_text, "the 'description' field is required", required=True),
    Rule("description", _not_blank, "the description cannot be empty"),
    Rule("price", lambda v: v is not None, "the 'price' field is required", required=True),
    Rule("price", _is_positive_decimal, "the price must be a positive number greater than 0"),
    Rule("price", _fits_price_scale, "the price can have at most 2 decimal places"),
]


def collect_violations(payload: Mapping[str, Any], rules: List[Rule] = PRODUCT_CREATE_RULES) -> List[str]:
    messages: List[str] = []
    failed_fields = set()
    for rule in rules:
        if rule.field in failed_fields:
            continue
        if not rule.check(payload.get(rule.field)):
            messages.append(rule.message)
            if rule.required:
                failed_fields.add(rule.field)
    return messages


def validate_product_create(payload: Mapping[str, Any]) -> ProductCreate:
    """
    Check a creation payload and return it trimmed and typed.

    Raises ValidationError listing every violated constraint.
    """
    violations = collect_violations(payload)
    if violations:
        raise ValidationError(violations)

    return ProductCreate(
        name=payload["name"].strip(),
        description=payload["description"].strip(),
        price=_to_decimal(payload["price"]).quantize(PRICE_STEP),
    )


def parse_product_id(raw: Any) -> int:
    """Path ids must be positive integers ("12", not "12.0", "-1" or "abc")."""
    text = str(raw).strip()
    if not (text.isascii() and text.isdigit()):
        raise ValidationError([INVALID_ID_MESSAGE])
    product_id = int(text)
    if product_id <= 0 or product_id > MAX_PRODUCT_ID:
        raise ValidationError([INVALID_ID_MESSAGE])
    return product_id
