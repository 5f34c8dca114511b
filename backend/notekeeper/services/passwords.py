"""Password hashing helpers using passlib.

Used by the seed script to store the administrative user's credentials.
pbkdf2_sha256 is implemented by passlib itself, so no native backend is
required.
"""

from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(plain: str) -> str:
    """Hash a plaintext password and return the encoded hash string."""
    if plain is None:
        raise ValueError("Password must not be None")
    return pwd_context.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    """Return True if `plain` matches the stored hash."""
    if plain is None or hashed is None:
        return False
    return pwd_context.verify(plain, hashed)
