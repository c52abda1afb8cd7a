import re

PHONE_RE = re.compile(r"^[6-9]\d{9}$")
EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
NAME_RE = re.compile(r"^[a-zA-Z\s]{3,100}$")
PINCODE_RE = re.compile(r"\d{6}")

MIN_ADDRESS_LENGTH = 20
MIN_ITEM_QUANTITY = 1
MAX_ITEM_QUANTITY = 5


def validate_phone(phone: str) -> bool:
    """Ten digit Indian mobile number starting with 6-9."""
    return bool(PHONE_RE.match(phone))


def validate_email(email: str) -> bool:
    return bool(EMAIL_RE.match(email))


def validate_name(name: str) -> bool:
    return bool(NAME_RE.match(name))


def validate_address(address: str) -> bool:
    """At least 20 characters and a 6-digit pincode somewhere in the text."""
    return len(address) >= MIN_ADDRESS_LENGTH and bool(PINCODE_RE.search(address))
