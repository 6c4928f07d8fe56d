from typing import Iterator

from sqlmodel import Session, create_engine

from settings import get_settings

settings = get_settings()

# SQLite connections are shared between the event loop and worker threads
connect_args = {"check_same_thread": False} if settings.database_url.startswith("sqlite") else {}

engine = create_engine(settings.database_url, connect_args=connect_args)


def get_session() -> Iterator[Session]:
    """Yield a database session bound to the request."""
    with Session(engine) as session:
        yield session
