import logging
from typing import Any

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm.exc import StaleDataError
from sqlmodel import Session, select

from portal.errors import ConflictError, NotFoundError
from portal.models.user import ADMIN_BADGE_NUMBER, Role, User

logger = logging.getLogger(__name__)

MODERATOR_FIELDS = frozenset(
    {
        "username",
        "password",
        "full_name",
        "badge_number",
        "profile_image",
        "designation",
        "department",
        "join_date",
        "contact_info",
    }
)
ADMIN_FIELDS = frozenset({"username", "password", "full_name"})


class UserRepository:
    """CRUD over the users table.

    Uniqueness of username and badge number is enforced by unique indexes;
    the lookups done first only give the caller a precise message.
    """

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, user_id: int) -> User | None:
        return self.db.get(User, user_id)

    def get_by_username(self, username: str) -> User | None:
        return self.db.exec(select(User).where(User.username == username)).first()

    def get_by_badge_number(self, badge_number: str) -> User | None:
        return self.db.exec(
            select(User).where(User.badge_number == badge_number)
        ).first()

    def list_moderators(self) -> list[User]:
        return list(
            self.db.exec(
                select(User).where(User.role == Role.MODERATOR.value).order_by(User.id)
            ).all()
        )

    def create_moderator(self, data: dict[str, Any]) -> User:
        fields = _pick(data, MODERATOR_FIELDS)
        self._ensure_unique(fields.get("username"), fields.get("badge_number"))
        user = User(**fields, role=Role.MODERATOR.value)
        self.db.add(user)
        self._commit()
        self.db.refresh(user)
        logger.info(f"Created moderator {user.id} ({user.username})")
        return user

    def create_admin(self, data: dict[str, Any]) -> User:
        fields = _pick(data, ADMIN_FIELDS)
        self._ensure_unique(fields.get("username"))
        if self.get_by_badge_number(ADMIN_BADGE_NUMBER):
            raise ConflictError("Admin account already exists")
        user = User(**fields, role=Role.ADMIN.value, badge_number=ADMIN_BADGE_NUMBER)
        self.db.add(user)
        self._commit()
        self.db.refresh(user)
        logger.info(f"Registered admin {user.id} ({user.username})")
        return user

    def update_moderator(self, user_id: int, data: dict[str, Any]) -> User:
        unknown = set(data) - MODERATOR_FIELDS
        if unknown:
            raise ValueError(f"Fields not updatable: {', '.join(sorted(unknown))}")
        user = self._lock_moderator(user_id)
        self._ensure_unique(
            data.get("username"), data.get("badge_number"), exclude_id=user_id
        )
        for key, value in data.items():
            setattr(user, key, value)
        self._commit()
        self.db.refresh(user)
        logger.info(f"Updated moderator {user_id}: {', '.join(sorted(data)) or 'no fields'}")
        return user

    def update_moderator_credentials(
        self, user_id: int, username: str, password: str
    ) -> User:
        user = self._lock_moderator(user_id)
        self._ensure_unique(username, exclude_id=user_id)
        user.username = username
        user.password = password
        self._commit()
        self.db.refresh(user)
        logger.info(f"Replaced credentials of moderator {user_id}")
        return user

    def delete_moderator(self, user_id: int) -> None:
        # One statement, so the role check cannot race a concurrent delete.
        result = self.db.exec(
            delete(User).where(User.id == user_id, User.role == Role.MODERATOR.value)
        )
        if result.rowcount == 0:
            self.db.rollback()
            raise NotFoundError()
        self._commit()
        logger.info(f"Deleted moderator {user_id}")

    def _lock_moderator(self, user_id: int) -> User:
        # Locks the row where the database supports it. SQLite does not, so a row
        # deleted before the write is caught as StaleDataError in _commit.
        user = self.db.exec(
            select(User).where(User.id == user_id).with_for_update()
        ).first()
        if user is None or user.role_kind is not Role.MODERATOR:
            self.db.rollback()
            raise NotFoundError()
        return user

    def _ensure_unique(
        self,
        username: str | None,
        badge_number: str | None = None,
        exclude_id: int | None = None,
    ) -> None:
        if username is not None:
            existing = self.get_by_username(username)
            if existing and existing.id != exclude_id:
                self.db.rollback()
                raise ConflictError("Username already exists")
        if badge_number is not None:
            existing = self.get_by_badge_number(badge_number)
            if existing and existing.id != exclude_id:
                self.db.rollback()
                raise ConflictError("Badge number already exists")

    def _commit(self) -> None:
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise ConflictError() from exc
        except StaleDataError as exc:
            # Row vanished between the lock and the write.
            self.db.rollback()
            raise NotFoundError() from exc


def _pick(data: dict[str, Any], allowed: frozenset[str]) -> dict[str, Any]:
    return {key: value for key, value in data.items() if key in allowed}
