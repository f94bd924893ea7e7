"""
Password hashing utilities using bcrypt.
"""

import bcrypt

from shared.config.constants import Limits
from shared.config.logging import get_logger
from shared.config.settings import settings

logger = get_logger(__name__)

_BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")


def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt.

    Example:
        hashed = hash_password("mypassword123")
        # Returns something like: $2b$12$...
    """
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a password against its hash.

    Non-bcrypt stored values never verify.
    """
    if not hashed_password.startswith(_BCRYPT_PREFIXES):
        logger.warning("SECURITY: stored password is not a bcrypt hash")
        return False

    encoded = plain_password.encode("utf-8")
    if len(encoded) > Limits.MAX_PASSWORD_BYTES:
        return False

    return bcrypt.checkpw(encoded, hashed_password.encode("utf-8"))


def needs_rehash(hashed_password: str) -> bool:
    """
    Check if a password hash should be regenerated after a successful login.

    True when the stored hash is not bcrypt or uses a different cost than configured.
    """
    if not hashed_password.startswith(_BCRYPT_PREFIXES):
        return True

    # Format: $2b$<rounds>$<salt+hash>
    try:
        rounds = int(hashed_password.split("$")[2])
    except (IndexError, ValueError):
        return True
    return rounds != settings.bcrypt_rounds
