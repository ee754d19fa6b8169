"""Password hashing utilities.

bcrypt handles salting itself and produces "$2b$" hashes. Accounts
carried over from the PHP backend hold "$2y$" hashes from
password_hash(); that variant is the same algorithm, so those verify
too and get re-hashed to "$2b$" on the next successful login.
"""

from functools import lru_cache

import bcrypt

BCRYPT_ROUNDS = 12
_CURRENT_PREFIX = "$2b$"
_PHP_PREFIX = "$2y$"


def hash_password(password: str) -> str:
    """Hash a password with bcrypt.

    Passwords are truncated to 72 bytes (bcrypt's limit).
    """
    pw_bytes = password.encode("utf-8")[:72]
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(pw_bytes, salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its hash. Malformed hashes never match."""
    if password_hash.startswith(_PHP_PREFIX):
        password_hash = _CURRENT_PREFIX + password_hash[len(_PHP_PREFIX):]
    try:
        pw_bytes = password.encode("utf-8")[:72]
        return bcrypt.checkpw(pw_bytes, password_hash.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def needs_rehash(password_hash: str) -> bool:
    """Check if a stored hash should be replaced with a fresh "$2b$" one."""
    return not password_hash.startswith(_CURRENT_PREFIX)


@lru_cache(maxsize=1)
def _dummy_hash() -> str:
    return hash_password("immy-dummy-password")


def dummy_verify(password: str) -> bool:
    """Spend one bcrypt check on a throwaway hash.

    Login calls this for unknown emails so they cost as much as a
    wrong password.
    """
    verify_password(password, _dummy_hash())
    return False
