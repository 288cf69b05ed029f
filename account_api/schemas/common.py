# account_api/schemas/common.py
import re

PASSWORD_MIN_LENGTH = 8

PASSWORD_RULES = (
    (re.compile(r"[A-Z]"), "Password must contain at least one uppercase letter"),
    (re.compile(r"[a-z]"), "Password must contain at least one lowercase letter"),
    (re.compile(r"\d"), "Password must contain at least one number"),
    (re.compile(r"[\W_]"), "Password must contain at least one special character"),
)


def check_password_strength(v: str) -> str:
    """field_validator body shared by every schema that accepts a new password."""
    if len(v) < PASSWORD_MIN_LENGTH:
        raise ValueError(f"Password must be at least {PASSWORD_MIN_LENGTH} characters long")
    for pattern, message in PASSWORD_RULES:
        if not pattern.search(v):
            raise ValueError(message)
    return v
