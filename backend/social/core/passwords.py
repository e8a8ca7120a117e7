"""Password Hashing — one-way hashing of user passwords before persistence.

Invariants:
    - Plaintext passwords never reach the store; only hash_password() output does
    - verify_password never raises on a malformed hash, it returns False
"""

from passlib.context import CryptContext

_pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return _pwd_context.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    try:
        return _pwd_context.verify(password, hashed)
    except (ValueError, TypeError):
        return False
