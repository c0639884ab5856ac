import secrets

from passlib.context import CryptContext

context = CryptContext(schemes=["argon2"], deprecated="auto")


def hash_password(password: str) -> str:
    return context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    return context.verify(plain, hashed)


def generate_token() -> str:
    """64 hex chars, used for email verification and password reset links."""
    return secrets.token_hex(32)
