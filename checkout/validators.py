import re

SHIPPING_FIELDS = ("first_name", "last_name", "email", "phone", "address", "city", "province", "zip_code")

# how the backend names each shipping field
WIRE_NAMES = {
    "first_name": "firstName",
    "last_name": "lastName",
    "email": "email",
    "phone": "phone",
    "address": "address",
    "city": "city",
    "province": "province",
    "zip_code": "zipCode",
}

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_RE = re.compile(r"^[0-9]{11}$")
PHONE_LENGTH = 11
PHONE_PREFIX = "09"

_NOT_DIGIT = re.compile(r"\D")
_NOT_NAME = re.compile(r"[^a-zA-Z\s'-]")

NAME_LIKE = ("first_name", "last_name", "city", "province")


def clean_shipping_value(field, value):
    """Input filtering applied as the user types."""
    value = "" if value is None else str(value)
    if field == "phone":
        return _NOT_DIGIT.sub("", value)[:PHONE_LENGTH]
    if field == "zip_code":
        return _NOT_DIGIT.sub("", value)
    if field in NAME_LIKE:
        return _NOT_NAME.sub("", value)
    return value


def validate_phone(phone):
    """Message for a bad Philippine mobile number, or None."""
    if not PHONE_RE.match(phone or ""):
        return "Please enter a valid 11-digit Philippine phone number"
    if not phone.startswith(PHONE_PREFIX):
        return "Phone number should start with 09 (e.g., 09123456789)"
    return None


def shipping_error(info):
    """
    First problem with the shipping form as ``(field, message)``, or None.
    Checks run in form order: required fields, email, phone.
    """
    for field in SHIPPING_FIELDS:
        if not str(info.get(field) or "").strip():
            return field, f"Please fill in {field.replace('_', ' ')}"

    if not EMAIL_RE.match(info["email"]):
        return "email", "Please enter a valid email address"

    message = validate_phone(info["phone"])
    if message:
        return "phone", message
    return None


def to_wire(info):
    return {WIRE_NAMES[field]: info.get(field, "") for field in SHIPPING_FIELDS}
