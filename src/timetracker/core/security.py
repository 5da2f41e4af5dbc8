"""Password hashing and verification utilities."""

from pwdlib import PasswordHash
from pwdlib.hashers.argon2 import Argon2Hasher
from pwdlib.hashers.bcrypt import BcryptHasher

# Argon2 for new hashes; bcrypt hashes generated elsewhere still verify
password_hash = PasswordHash((Argon2Hasher(), BcryptHasher()))


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify plain password against hashed password."""
    try:
        return password_hash.verify(plain_password, hashed_password)
    except ValueError:
        # bcrypt refuses passwords over 72 bytes; such a password cannot match
        return False


def hash_password(password: str) -> str:
    """Hash password using Argon2."""
    return password_hash.hash(password)


def is_supported_hash(hashed_password: str) -> bool:
    """True if one of the configured hashers recognizes the hash format."""
    return any(hasher.identify(hashed_password) for hasher in password_hash.hashers)
