"""Password hashing utilities."""

import re

import bcrypt

# Letters, numbers and underscores only
PROFILE_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_]+$")


def is_valid_profile_name(profile_name: str) -> bool:
    return bool(PROFILE_NAME_PATTERN.match(profile_name))


# ── Password hashing ──────────────────────────────────────────────────────────


def hash_password(plain: str) -> str:
    """Return bcrypt hash of *plain* password.

    Args:
        plain: Plain text password

    Returns:
        Bcrypt hash of the password (str)

    Raises:
        ValueError: If password is longer than 72 bytes
    """
    if len(plain.encode('utf-8')) > 72:
        raise ValueError(
            f"Password is {len(plain.encode('utf-8'))} bytes, but bcrypt has a "
            f"72-byte limit. Please use a shorter password."
        )
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(plain.encode('utf-8'), salt)
    return hashed.decode('utf-8')


def verify_password(plain: str, hashed: str) -> bool:
    """Check *plain* against *hashed* password.

    Returns False for malformed hashes instead of raising.
    """
    try:
        return bcrypt.checkpw(plain.encode('utf-8'), hashed.encode('utf-8'))
    except ValueError:
        return False
