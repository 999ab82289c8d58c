from typing import Optional

import bcrypt

from app.config import get_settings

# bcrypt only looks at the first 72 bytes; newer releases refuse longer input.
MAX_PASSWORD_BYTES = 72

# Checked against when the email is unknown so both failure paths cost the same.
_DUMMY_HASH: Optional[bytes] = None


def _secret(password: str) -> bytes:
    return password.encode("utf-8")[:MAX_PASSWORD_BYTES]


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=get_settings().bcrypt_rounds)
    return bcrypt.hashpw(_secret(password), salt).decode("utf-8")


def verify_password(password: str, stored: Optional[str]) -> bool:
    global _DUMMY_HASH
    if not stored:
        if _DUMMY_HASH is None:
            _DUMMY_HASH = hash_password("not-a-real-password").encode("utf-8")
        bcrypt.checkpw(_secret(password), _DUMMY_HASH)
        return False
    try:
        return bcrypt.checkpw(_secret(password), stored.encode("utf-8"))
    except ValueError:
        # Not a bcrypt hash.
        return False
