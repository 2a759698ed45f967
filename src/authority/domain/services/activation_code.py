"""Activation code generation and verification.

Only the SHA-256 hash of an activation code is ever stored; the raw code
leaves the system once, inside the activation email.
"""

import hashlib
import hmac
import secrets


def generate_activation_code(num_bytes: int = 32) -> tuple[str, str]:
    """Generate a new activation code.

    Args:
        num_bytes: Entropy of the code in bytes.

    Returns:
        A tuple of (raw_code, code_hash).
    """
    raw_code = secrets.token_urlsafe(num_bytes)
    return raw_code, hash_activation_code(raw_code)


def hash_activation_code(raw_code: str) -> str:
    return hashlib.sha256(raw_code.encode()).hexdigest()


def activation_code_matches(raw_code: str | None, code_hash: str | None) -> bool:
    """Compare a submitted code with the stored hash in constant time.

    A missing code or a missing hash (already consumed) never matches.
    """
    if not raw_code or not code_hash:
        return False
    return hmac.compare_digest(hash_activation_code(raw_code), code_hash)
