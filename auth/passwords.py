"""PBKDF2 password hashing.

Stored format: pbkdf2_sha256$<iterations>$<salt hex>$<hash hex>. The
iteration count travels with the hash so it can be raised without
invalidating existing passwords.
"""

import hashlib
import secrets

_ALGORITHM = "pbkdf2_sha256"


def hash_password(password: str, iterations: int = 390_000) -> str:
    """Hash password with a fresh random salt."""
    salt = secrets.token_bytes(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    return f"{_ALGORITHM}${iterations}${salt.hex()}${digest.hex()}"


def verify_password(password: str, stored: str) -> bool:
    """Constant-time check of password against a stored hash. False if malformed."""
    try:
        algorithm, iterations, salt_hex, digest_hex = stored.split("$")
        salt = bytes.fromhex(salt_hex)
        expected = bytes.fromhex(digest_hex)
        rounds = int(iterations)
    except ValueError:
        return False

    if algorithm != _ALGORITHM:
        return False

    candidate = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, rounds)
    return secrets.compare_digest(candidate, expected)
