"""Field validators for university identity numbers and phone numbers."""

import re

# e.g. 20-52hl077
MATRIC_NUMBER_PATTERN = re.compile(r"^\d{2}-\d{2}hl\d{3}$", re.IGNORECASE)
NIGERIAN_PHONE_PATTERN = re.compile(r"^(\+234|0)[789]\d{9}$")


def normalize_matric_number(value: str) -> str:
    """Validate a matric number and return it lowercased."""
    cleaned = value.strip()
    if not MATRIC_NUMBER_PATTERN.match(cleaned):
        raise ValueError("Invalid matric number format (e.g., 20-52hl077)")
    return cleaned.lower()


def normalize_phone_number(value: str) -> str:
    """Validate a Nigerian phone number and return it in +234 form."""
    cleaned = re.sub(r"\s", "", value)
    if not NIGERIAN_PHONE_PATTERN.match(cleaned):
        raise ValueError("Invalid Nigerian phone number")
    if cleaned.startswith("0"):
        return "+234" + cleaned[1:]
    return cleaned
