"""
Token revocation tracking.

Revoked tokens are written to a shared redis store with a TTL equal to the
token's remaining lifetime, so revocation survives restarts and is visible
to every instance. A process-local set sits in front of it as a fast path
and is the only store when redis is not configured.
"""
import hashlib
import threading
from typing import Optional

from redis.asyncio import Redis


class RevokedTokenSet:
    """Process-wide set of revoked tokens, safe for concurrent use."""

    def __init__(self):
        self._tokens: set[str] = set()
        self._lock = threading.Lock()

    def add(self, token: str) -> bool:
        """Add a token. Returns True if it was not present before."""
        with self._lock:
            if token in self._tokens:
                return False
            self._tokens.add(token)
            return True

    def __contains__(self, token: str) -> bool:
        with self._lock:
            return token in self._tokens

    def __len__(self) -> int:
        with self._lock:
            return len(self._tokens)


class TokenRevocationStore:
    """Revocation store backed by redis with a local fast-path cache."""

    KEY_PREFIX = "revoked_token:"

    def __init__(
        self,
        local: Optional[RevokedTokenSet] = None,
        redis: Optional[Redis] = None,
    ):
        self.local = local if local is not None else RevokedTokenSet()
        self.redis = redis

    @classmethod
    def key_for(cls, token: str) -> str:
        digest = hashlib.sha256(token.encode("utf-8")).hexdigest()
        return f"{cls.KEY_PREFIX}{digest}"

    async def revoke(self, token: str, ttl_seconds: int) -> bool:
        """
        Mark a token as revoked.

        Args:
            token: The raw bearer token
            ttl_seconds: Remaining lifetime; the shared entry expires with it

        Returns:
            True if the token was newly revoked, False if it already was
        """
        newly_added = self.local.add(token)

        if self.redis is None or ttl_seconds <= 0:
            return newly_added

        # SET NX is the atomic "add if absent" across instances
        created = await self.redis.set(self.key_for(token), "1", ex=ttl_seconds, nx=True)
        return bool(created)

    async def is_revoked(self, token: str) -> bool:
        """Check the local cache first, then the shared store."""
        if token in self.local:
            return True

        if self.redis is None:
            return False

        if await self.redis.exists(self.key_for(token)):
            self.local.add(token)
            return True
        return False
