"""Credential hashing for Authority."""

from authority.infrastructure.auth.password_hasher import hash_password

__all__ = ["hash_password"]
