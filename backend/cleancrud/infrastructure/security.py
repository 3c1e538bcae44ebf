"""Credential Primitives — password hashing and opaque bearer tokens.

Invariants:
    - Plain passwords and plain tokens are never persisted
    - Tokens are stored as SHA-256 hex; comparison happens on the hash

Design Decisions:
    - werkzeug.security for password hashing: salted, algorithm tagged in the hash
    - secrets.token_urlsafe for tokens: opaque, revocable server-side (no JWT)
"""

import hashlib
import secrets

from werkzeug.security import check_password_hash, generate_password_hash

TOKEN_BYTES = 32


def hash_password(password: str) -> str:
    return generate_password_hash(password)


def verify_password(password_hash: str, password: str) -> bool:
    if not password_hash or not password:
        return False
    return check_password_hash(password_hash, password)


def generate_token() -> tuple[str, str]:
    """New bearer token. Returns (token, token_hash)."""
    token = secrets.token_urlsafe(TOKEN_BYTES)
    return token, hash_token(token)


def hash_token(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()
