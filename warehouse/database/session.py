from contextlib import contextmanager

from sqlalchemy.orm import sessionmaker

from warehouse.database.engine import engine

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    expire_on_commit=False,
    bind=engine,
)


def get_db():
    """Request-scoped session for FastAPI dependencies."""
    with session_scope() as db:
        yield db


@contextmanager
def session_scope(factory=SessionLocal):
    """Session for scripts and requests; commits are left to the repository."""
    db = factory()
    try:
        yield db
    finally:
        db.close()
