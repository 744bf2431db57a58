from datetime import datetime

from sqlmodel import Field, SQLModel


class SessionRecord(SQLModel, table=True):
    __tablename__ = "sessions"

    sid: str = Field(primary_key=True)
    user_id: int = Field(index=True)
    expires_at: datetime = Field(index=True)  # naive UTC
