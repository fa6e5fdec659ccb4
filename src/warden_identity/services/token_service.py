"""Opaque token generation for confirmation and reset flows."""

import secrets


class TokenGenerator:
    """Produces unguessable, URL-safe opaque tokens.

    Tokens come from the OS CSPRNG (``secrets``); with the default 32 bytes
    of entropy collisions are negligible, so callers treat them as unique
    without re-checking the store.
    """

    DEFAULT_BYTES = 32

    def __init__(self, nbytes: int = DEFAULT_BYTES):
        self._nbytes = nbytes

    def generate(self) -> str:
        return secrets.token_urlsafe(self._nbytes)

    __call__ = generate
