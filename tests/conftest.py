import logging  # noqa: F401
import sys

import pytest
import pytest_postgresql
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool

from labsite.db.base import Base
from labsite.models import *  # noqa: F403
from labsite.models.author import Author
from labsite.models.enums.user_role import UserRole
from labsite.models.researcher import Researcher
from labsite.models.role import Role
from labsite.models.user import User

from tests.helpers.constants import (
    ADMIN_USER,
    EXTRA_USER,
    TEST_RESEARCHER,
    TEST_STANDALONE_AUTHOR,
    TEST_USER,
)

sys.path.append(".")

# Attempt to import optional top level fixtures. If the modules they depend on are not installed,
# we won't have access to our full fixture suite and only a limited subset of tests can be run.
try:
    from tests.conftest_optional import *  # noqa: F401, F403

except ModuleNotFoundError:
    pass

# needs the pytest_postgresql plugin installed
assert pytest_postgresql.factories


@pytest.fixture()
def db_engine(postgresql):
    # Un-comment this line to log all database queries:
    # logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)

    connection = (
        f"postgresql+psycopg2://{postgresql.info.user}:"
        f"@{postgresql.info.host}:{postgresql.info.port}/{postgresql.info.dbname}"
    )

    engine = create_engine(connection, echo=False, poolclass=NullPool, isolation_level="READ COMMITTED")
    Base.metadata.create_all(bind=engine)

    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def session_factory(db_engine):
    """A factory for additional, independent sessions, for tests that need concurrent transactions."""
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture()
def session(session_factory):
    session = session_factory()

    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def setup_lib_db(session):
    """
    Three users: a researcher with a research profile, a member without one, and an admin. No
    author rows exist yet.
    """
    db = session
    db.add(Role(name=UserRole.admin))
    db.add(Role(name=UserRole.researcher))
    db.add(Role(name=UserRole.member))
    db.flush()

    roles = {role.name: role for role in db.query(Role).all()}
    test_user = User(**TEST_USER, role_objs=[roles[UserRole.researcher]])
    db.add(test_user)
    db.add(User(**EXTRA_USER, role_objs=[roles[UserRole.member]]))
    db.add(User(**ADMIN_USER, role_objs=[roles[UserRole.admin]]))
    db.flush()

    db.add(Researcher(user_id=test_user.id, **TEST_RESEARCHER))
    db.commit()


@pytest.fixture
def test_researcher(session, setup_lib_db) -> Researcher:
    return session.query(Researcher).join(Researcher.user).filter(User.email == TEST_USER["email"]).one()


@pytest.fixture
def standalone_author(session, setup_lib_db) -> Author:
    author = Author(**TEST_STANDALONE_AUTHOR)
    session.add(author)
    session.commit()
    session.refresh(author)
    return author
