# 📄 File: storefront/shared/infrastructure/session_store.py
#
# 🧭 Purpose (Layman Explanation):
# Keeps each visitor's session (who is logged in, pending messages) in Redis
# instead of in the web server's memory, so sessions survive restarts.
#
# 🧪 Purpose (Technical Summary):
# Session store contract plus its Redis implementation. Session data is stored
# as JSON under a prefixed key; the key's TTL is set once when the session is
# first persisted and kept on later writes, giving an absolute expiry.
#
# 🔗 Dependencies:
# - redis.asyncio
# - storefront.shared.core.exceptions
#
# 🔄 Connected Modules / Calls From:
# - storefront.api.middleware.sessions (load/save/destroy per request)
# - storefront.main (store construction in the lifespan)

import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from redis.asyncio import Redis
from redis.exceptions import RedisError

from storefront.shared.core.exceptions import SessionStoreError

logger = logging.getLogger(__name__)


class SessionStore(ABC):
    """
    Abstract persistent mapping of session ids to session data.
    """

    @abstractmethod
    async def load(self, session_id: str) -> Optional[Dict[str, Any]]:
        """Return stored data for a session, or None if unknown or expired."""
        pass

    @abstractmethod
    async def save(self, session_id: str, data: Dict[str, Any], ttl: Optional[int] = None) -> bool:
        """
        Persist session data.

        Args:
            session_id: Session identifier
            data: JSON-serializable session data
            ttl: Lifetime in seconds for a new session; None keeps the
                 existing expiry of a stored session

        Returns:
            False when an existing session vanished (expired) before the write
        """
        pass

    @abstractmethod
    async def destroy(self, session_id: str) -> None:
        """Remove a session."""
        pass


class RedisSessionStore(SessionStore):
    """
    Redis-backed session store.
    """

    def __init__(self, client: Redis, key_prefix: str = "storefront:sess:"):
        self.client = client
        self.key_prefix = key_prefix

    def _key(self, session_id: str) -> str:
        return f"{self.key_prefix}{session_id}"

    async def load(self, session_id: str) -> Optional[Dict[str, Any]]:
        try:
            raw = await self.client.get(self._key(session_id))
        except RedisError as e:
            logger.error(f"Failed to load session: {e}")
            raise SessionStoreError(operation="load") from e

        if raw is None:
            return None

        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, TypeError):
            logger.warning(f"Discarding unreadable session {session_id}")
            return None

        return data if isinstance(data, dict) else None

    async def save(self, session_id: str, data: Dict[str, Any], ttl: Optional[int] = None) -> bool:
        payload = json.dumps(data, default=str)
        try:
            if ttl is not None:
                await self.client.set(self._key(session_id), payload, ex=ttl)
                return True

            # Only overwrite a live key so an expired session is never revived without a TTL
            result = await self.client.set(self._key(session_id), payload, keepttl=True, xx=True)
        except RedisError as e:
            logger.error(f"Failed to save session: {e}")
            raise SessionStoreError(operation="save") from e

        return bool(result)

    async def destroy(self, session_id: str) -> None:
        try:
            await self.client.delete(self._key(session_id))
        except RedisError as e:
            logger.error(f"Failed to destroy session: {e}")
            raise SessionStoreError(operation="destroy") from e
