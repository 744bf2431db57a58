import logging
import secrets
from datetime import UTC, datetime, timedelta
from typing import Protocol

from sqlmodel import Session, select

from portal.models.session import SessionRecord

logger = logging.getLogger(__name__)

DEFAULT_TTL = timedelta(hours=24)


def _utcnow() -> datetime:
    return datetime.now(UTC).replace(tzinfo=None)


def new_token() -> str:
    return secrets.token_urlsafe(32)


class SessionStore(Protocol):
    def create(self, user_id: int) -> str: ...

    def resolve(self, token: str) -> int | None: ...

    def destroy(self, token: str) -> None: ...

    def purge_user(self, user_id: int) -> None: ...


class MemorySessionStore:
    """Process-local store; sessions vanish with the process."""

    def __init__(self, ttl: timedelta = DEFAULT_TTL):
        self.ttl = ttl
        self._sessions: dict[str, tuple[int, datetime]] = {}

    def create(self, user_id: int) -> str:
        token = new_token()
        self._sessions[token] = (user_id, _utcnow() + self.ttl)
        return token

    def resolve(self, token: str) -> int | None:
        entry = self._sessions.get(token)
        if entry is None:
            return None
        user_id, expires_at = entry
        if expires_at <= _utcnow():
            del self._sessions[token]
            return None
        return user_id

    def destroy(self, token: str) -> None:
        self._sessions.pop(token, None)

    def purge_user(self, user_id: int) -> None:
        for token in [t for t, (uid, _) in self._sessions.items() if uid == user_id]:
            del self._sessions[token]

    def __len__(self) -> int:
        return len(self._sessions)


class DatabaseSessionStore:
    def __init__(self, db: Session, ttl: timedelta = DEFAULT_TTL):
        self.db = db
        self.ttl = ttl

    def create(self, user_id: int) -> str:
        record = SessionRecord(
            sid=new_token(), user_id=user_id, expires_at=_utcnow() + self.ttl
        )
        self.db.add(record)
        self.db.commit()
        return record.sid

    def resolve(self, token: str) -> int | None:
        record = self.db.get(SessionRecord, token)
        if record is None:
            return None
        if record.expires_at <= _utcnow():
            self.db.delete(record)
            self.db.commit()
            return None
        return record.user_id

    def destroy(self, token: str) -> None:
        record = self.db.get(SessionRecord, token)
        if record is not None:
            self.db.delete(record)
            self.db.commit()

    def purge_user(self, user_id: int) -> None:
        records = self.db.exec(
            select(SessionRecord).where(SessionRecord.user_id == user_id)
        ).all()
        for record in records:
            self.db.delete(record)
        self.db.commit()
        if records:
            logger.info(f"Revoked {len(records)} session(s) of user {user_id}")
