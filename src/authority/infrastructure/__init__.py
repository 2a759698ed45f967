"""Infrastructure adapters: persistence, hashing and email delivery."""
