from collections.abc import Generator

from sqlmodel import Session, SQLModel, create_engine

from portal.config import settings

_connect_args = (
    {"check_same_thread": False} if settings.database_url.startswith("sqlite") else {}
)
engine = create_engine(settings.database_url, echo=False, connect_args=_connect_args)


def init_db() -> None:
    import portal.models  # noqa: F401  registers all models with SQLModel metadata

    SQLModel.metadata.create_all(engine)


def get_session() -> Generator[Session, None, None]:
    # Rows stay readable after commit; responses are serialized from them.
    with Session(engine, expire_on_commit=False) as session:
        yield session
