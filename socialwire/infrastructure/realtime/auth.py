"""Handshake authentication for realtime connections."""

from __future__ import annotations

import logging

from socialwire.infrastructure.security import decode_access_token, user_id_from_claims

logger = logging.getLogger(__name__)


class TokenAuthenticator:
    """Resolve the bearer token presented at connection time to a user id."""

    def verify(self, token: str | None) -> int | None:
        """Return the user id embedded in ``token`` or ``None`` when it is unusable.

        Covers missing tokens, bad signatures, expired tokens and tokens
        without an integer subject.
        """

        if not token:
            return None
        try:
            claims = decode_access_token(token)
        except ValueError:
            logger.info("Rejected realtime handshake: invalid or expired token")
            return None

        user_id = user_id_from_claims(claims)
        if user_id is None:
            logger.info("Rejected realtime handshake: token has no usable subject")
        return user_id


__all__ = ["TokenAuthenticator"]
