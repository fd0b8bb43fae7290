from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from sqlalchemy import create_engine, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from cinescope.models.storage import Base, KeyValueEntry

logger = logging.getLogger(__name__)


class KeyValueStore(ABC):
    """Durable string store, read and written wholesale per key."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        ...


class MemoryKeyValueStore(KeyValueStore):
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class SqlKeyValueStore(KeyValueStore):
    def __init__(self, engine: Engine):
        self.engine = engine
        self._session_factory = sessionmaker(engine, expire_on_commit=False)
        Base.metadata.create_all(engine)

    @classmethod
    def from_url(cls, database_url: str) -> SqlKeyValueStore:
        logger.info("Opening key-value store: %s", database_url)
        return cls(create_engine(database_url))

    def get(self, key: str) -> str | None:
        with self._session_factory() as session:
            return session.scalar(
                select(KeyValueEntry.value).where(KeyValueEntry.key == key)
            )

    def set(self, key: str, value: str) -> None:
        with self._session_factory.begin() as session:
            self._upsert(session, key, value)

    @staticmethod
    def _upsert(session: Session, key: str, value: str) -> None:
        entry = session.get(KeyValueEntry, key)
        if entry is None:
            session.add(KeyValueEntry(key=key, value=value))
        else:
            entry.value = value

    def dispose(self) -> None:
        self.engine.dispose()
