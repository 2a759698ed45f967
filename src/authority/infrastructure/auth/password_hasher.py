"""Password hashing using Argon2id.

Only hashes produced here are handed to the credential store; plaintext
passwords never leave the lifecycle service.
"""

from argon2 import PasswordHasher

_hasher = PasswordHasher()


def hash_password(password: str) -> str:
    """Hash a password.

    Example:
        >>> hash_password("s3cret").startswith("$argon2id$")
        True
    """
    return _hasher.hash(password)
