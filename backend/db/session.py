from collections.abc import Generator, Iterator
from contextlib import contextmanager
from typing import Any

from fastapi import Request
from sqlmodel import Session, SQLModel, create_engine
from sqlalchemy.orm import sessionmaker

from core.config import Settings


class Store:
    """Owns the engine and hands out scoped database sessions."""

    def __init__(self, database_uri: str, **engine_kwargs: Any):
        self.engine = create_engine(database_uri, **engine_kwargs)
        self.SessionLocal = sessionmaker(
            bind=self.engine, class_=Session, autoflush=False
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Store":
        # FastAPI runs sync endpoints in a threadpool
        return cls(
            settings.SQLALCHEMY_DATABASE_URI,
            connect_args={"check_same_thread": False},
        )

    def create_all(self) -> None:
        import models  # noqa: F401  registers the tables on the metadata

        SQLModel.metadata.create_all(self.engine)

    @contextmanager
    def session(self) -> Iterator[Session]:
        with self.SessionLocal() as session:
            try:
                yield session
            except Exception:
                session.rollback()
                raise

    def close(self) -> None:
        self.engine.dispose()


def get_db(request: Request) -> Generator[Session, None, None]:
    store: Store = request.app.state.store
    with store.session() as session:
        yield session
