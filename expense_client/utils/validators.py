"""Request validators."""
import math

from expense_client.api.errors import ValidationFailure


def require_keys(payload, *keys):
    missing = [k for k in keys if (payload or {}).get(k) in (None, "")]
    if missing:
        raise ValidationFailure(f"Missing required fields: {', '.join(missing)}")
    return True


def parse_amount(value):
    """Parse a form amount into a finite, non-negative float."""
    try:
        amount = float(value)
    except (TypeError, ValueError):
        raise ValidationFailure("Amount must be a number")
    if not math.isfinite(amount):
        raise ValidationFailure("Amount must be a number")
    if amount < 0:
        raise ValidationFailure("Amount must be zero or more")
    return amount


def passwords_match(password, confirm_password):
    if password != confirm_password:
        raise ValidationFailure("Passwords do not match!")
    return True
