from typing import Iterator

import pytest
from sqlalchemy import Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column, sessionmaker

from cuse.exceptions import StorageError
from cuse.loader import SqlAlchemyEntityLoader
from cuse.storage import get_engine, make_session_factory, session_scope


class Base(DeclarativeBase):
    pass


class Author(Base):
    __tablename__ = "authors"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(128))


class Tag(Base):
    __tablename__ = "tags"

    slug: Mapped[str] = mapped_column(String(64), primary_key=True)


class Membership(Base):
    __tablename__ = "memberships"

    author_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    group_id: Mapped[int] = mapped_column(Integer, primary_key=True)


@pytest.fixture
def session_factory() -> Iterator[sessionmaker[Session]]:
    engine = get_engine("sqlite://")
    Base.metadata.create_all(engine)
    factory = make_session_factory(engine)
    with session_scope(factory) as session:
        session.add_all([Author(id=i, name=f"author {i}") for i in (1, 2, 3)])
        session.add_all([Tag(slug="python"), Tag(slug="search")])
    yield factory
    engine.dispose()


def test_load_all_preserves_id_order(session_factory: sessionmaker[Session]) -> None:
    loader = SqlAlchemyEntityLoader(session_factory)
    authors = loader.load_all(Author, ["3", "1", "2"])
    assert [a.id for a in authors] == [3, 1, 2]
    # Instances stay usable after the session is closed
    assert authors[0].name == "author 3"


def test_missing_ids_are_omitted(session_factory: sessionmaker[Session]) -> None:
    loader = SqlAlchemyEntityLoader(session_factory)
    assert [a.id for a in loader.load_all(Author, ["2", "99", "1"])] == [2, 1]


def test_string_primary_keys(session_factory: sessionmaker[Session]) -> None:
    loader = SqlAlchemyEntityLoader(session_factory)
    assert [t.slug for t in loader.load_all(Tag, ["search", "python"])] == ["search", "python"]


def test_empty_ids_skip_the_database(session_factory: sessionmaker[Session]) -> None:
    assert SqlAlchemyEntityLoader(session_factory).load_all(Author, []) == []


def test_unconvertible_id_raises(session_factory: sessionmaker[Session]) -> None:
    with pytest.raises(StorageError):
        SqlAlchemyEntityLoader(session_factory).load_all(Author, ["abc"])


def test_unmapped_type_raises(session_factory: sessionmaker[Session]) -> None:
    class NotMapped:
        pass

    with pytest.raises(StorageError):
        SqlAlchemyEntityLoader(session_factory).load_all(NotMapped, ["1"])


def test_composite_primary_key_raises(session_factory: sessionmaker[Session]) -> None:
    with pytest.raises(StorageError):
        SqlAlchemyEntityLoader(session_factory).load_all(Membership, ["1"])


def test_session_scope_rolls_back_on_error(session_factory: sessionmaker[Session]) -> None:
    with pytest.raises(RuntimeError):
        with session_scope(session_factory) as session:
            session.add(Author(id=10, name="rolled back"))
            session.flush()
            raise RuntimeError("boom")

    with session_scope(session_factory) as session:
        assert session.get(Author, 10) is None
