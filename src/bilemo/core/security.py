"""Password hashing for client credentials."""

from passlib.context import CryptContext

_pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return _pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its stored hash; malformed hashes never match."""
    try:
        return _pwd_context.verify(password, password_hash)
    except ValueError:
        return False
