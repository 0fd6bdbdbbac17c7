# This module handles the persistence of session records using Redis.
# Date: 2026-10-19
# Version: 0.3.0

from datetime import datetime
from typing import List, Optional
from redis.asyncio import Redis, from_url
from redis.exceptions import RedisError

from assistant.core.config import get_settings
from assistant.models.common import SessionRecord
from assistant.utils.logger import console

KEY_PREFIX = "session:"
# Sorted set of completed session ids, scored by start time.
COMPLETED_INDEX_KEY = "sessions:completed"


class SessionManager:
    """
    Stores session records in Redis asynchronously, one JSON document per session,
    with a TTL refreshed on every save. Completed sessions are kept longer and are
    also listed in a sorted index so the most recent ones can be read back.
    """
    _redis_client: Redis
    _session_ttl: int
    _completed_ttl: int

    def __init__(self, redis_client: Optional[Redis] = None):
        """Initializes the async Redis client from the application settings."""
        settings = get_settings()
        self._session_ttl = settings.SESSION_TTL_SECONDS
        self._completed_ttl = settings.COMPLETED_SESSION_TTL_SECONDS
        self._redis_client = redis_client or from_url(settings.REDIS_URL, decode_responses=True)
        console.info("Async Redis client for session management initialized.")

    @staticmethod
    def _key(session_id: str) -> str:
        return f"{KEY_PREFIX}{session_id}"

    async def save_session(self, record: SessionRecord) -> None:
        """
        Saves a SessionRecord to Redis.
        Raises RedisError when the store is unreachable; the route reports it.
        """
        completed = record.status == "completed"
        ttl = self._completed_ttl if completed else self._session_ttl
        try:
            await self._redis_client.set(self._key(record.session_id), record.model_dump_json(), ex=ttl)
            if completed:
                score = datetime.fromisoformat(record.started_at).timestamp()
                await self._redis_client.zadd(COMPLETED_INDEX_KEY, {record.session_id: score})
        except RedisError:
            console.exception(f"Failed to save session '{record.session_id}' to Redis.")
            raise
        console.info(f"Session '{record.session_id}' saved to Redis.")

    async def get_session(self, session_id: str) -> Optional[SessionRecord]:
        """Retrieves a SessionRecord from Redis, or None when the session is unknown."""
        try:
            record_json = await self._redis_client.get(self._key(session_id))
        except RedisError:
            console.exception(f"Could not read session '{session_id}' from Redis.")
            raise
        if not record_json:
            console.info(f"Session '{session_id}' not found in Redis.")
            return None
        return SessionRecord.model_validate_json(record_json)

    async def get_recent_completed(self, limit: int = 3) -> List[SessionRecord]:
        """
        Returns up to `limit` completed sessions with a summary, newest start first.
        Index entries whose record has expired are pruned on the way.
        """
        session_ids = await self._redis_client.zrevrange(COMPLETED_INDEX_KEY, 0, limit - 1)
        if not session_ids:
            return []

        documents = await self._redis_client.mget([self._key(session_id) for session_id in session_ids])
        expired = [session_id for session_id, document in zip(session_ids, documents) if not document]
        if expired:
            await self._redis_client.zrem(COMPLETED_INDEX_KEY, *expired)

        records = [SessionRecord.model_validate_json(document) for document in documents if document]
        return [record for record in records if record.summary]

    async def close(self) -> None:
        await self._redis_client.aclose()

session_manager = SessionManager()
