"""
bcrypt password hashes.

Stored hashes look like ``$2b$12$<salt+digest>``; the second field is the
cost. Hashes made at an older cost are upgraded on the next good login.
"""

from typing import Optional

import bcrypt

BCRYPT_ROUNDS = 12

# bcrypt ignores everything past this many bytes
MAX_PASSWORD_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:MAX_PASSWORD_BYTES]


def hash_password(password: str) -> str:
    return bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("ascii")


def verify_password(password: str, stored_hash: str) -> bool:
    """Check a password. A stored value bcrypt cannot parse never matches."""
    try:
        return bcrypt.checkpw(_encode(password), stored_hash.encode("ascii"))
    except (ValueError, UnicodeEncodeError):
        return False


def hash_cost(stored_hash: str) -> Optional[int]:
    """The cost recorded in a bcrypt hash, or None when it is not one."""
    fields = stored_hash.split("$")
    if len(fields) != 4 or not fields[2].isdigit():
        return None
    return int(fields[2])


def needs_rehash(stored_hash: str) -> bool:
    return hash_cost(stored_hash) != BCRYPT_ROUNDS
