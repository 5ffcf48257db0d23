# app/core/passwords.py
import bcrypt

BCRYPT_ROUNDS = 10

# bcrypt only looks at the first 72 bytes; newer releases reject longer input.
MAX_PASSWORD_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:MAX_PASSWORD_BYTES]


def hash_password(password: str) -> str:
    """Return a bcrypt hash (utf-8 str) suitable for the password column."""
    hashed = bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=BCRYPT_ROUNDS))
    return hashed.decode("utf-8")


def verify_password(password: str, hashed: str | None) -> bool:
    """
    Check a raw password against a stored bcrypt hash.

    A missing or malformed hash never matches.
    """
    if not hashed:
        return False
    try:
        return bcrypt.checkpw(_encode(password), hashed.encode("utf-8"))
    except ValueError:
        return False
