"""Stateless, tamper-evident identifiers for flag records.

A flag token has the shape ``flag-<id>-<signature>`` where *signature* is the
lowercase hex HMAC-SHA256 of ``str(id)`` under the server secret.  Because
the signature is a pure function of ``(id, secret)`` any process holding the
secret can mint and verify tokens without storing them.  Revoking a flag means
deleting its row in the record store, never the token.
"""

from __future__ import annotations

import hashlib
import hmac
import re

from videocaptions.core.errors import FlagSecretMissingError, InvalidFlagTokenError

TOKEN_TAG = "flag"

# ``<tag>-<id>-<hex>``; the id may carry a leading minus sign, which is why the
# token is not simply split on "-".
_TOKEN_RE = re.compile(r"(?P<tag>[a-z]+)-(?P<id>-?[0-9]+)-(?P<sig>[0-9a-f]+)")

__all__ = ["FlagSigner", "TOKEN_TAG"]


class FlagSigner:
    """Mint and verify flag tokens with a process-wide secret."""

    def __init__(self, secret: str | bytes | None):
        if not secret:
            raise FlagSecretMissingError("FLAG_SECRET environment variable is not set")
        self._key = secret.encode("utf-8") if isinstance(secret, str) else secret

    def signature(self, flag_id: int) -> str:
        """Return the lowercase hex HMAC-SHA256 of *flag_id*, the token suffix."""
        return hmac.new(self._key, str(flag_id).encode("ascii"), hashlib.sha256).hexdigest()

    def mint(self, flag_id: int) -> str:
        """Return the client-facing token for record *flag_id*."""

        return f"{TOKEN_TAG}-{flag_id}-{self.signature(flag_id)}"

    def verify(self, token: str) -> int:
        """Return the record id embedded in *token*.

        Raises
        ------
        InvalidFlagTokenError
            When the token is malformed or its signature does not match.
        """

        match = _TOKEN_RE.fullmatch(token)
        if match is None or match["tag"] != TOKEN_TAG:
            raise InvalidFlagTokenError()

        raw_id = match["id"]
        try:
            flag_id = int(raw_id)
        except ValueError:  # exceeds the interpreter's int/str digit limit
            raise InvalidFlagTokenError() from None
        # Only the canonical decimal form is ever minted ("042" or "-0" are not).
        if str(flag_id) != raw_id:
            raise InvalidFlagTokenError()

        if not hmac.compare_digest(self.signature(flag_id), match["sig"]):
            raise InvalidFlagTokenError()
        return flag_id
