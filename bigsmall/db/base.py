from sqlmodel import SQLModel, create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from bigsmall.config import settings
import os


def make_engine(dsn: str | None = None) -> Engine:
    dsn = dsn or settings.db_dsn
    if not dsn.startswith("sqlite"):
        return create_engine(dsn, echo=False)
    # scheduler and API threads share one engine
    kwargs = {"connect_args": {"check_same_thread": False}}
    if dsn in ("sqlite://", "sqlite:///:memory:"):
        kwargs["poolclass"] = StaticPool
    elif dsn.startswith("sqlite:///"):
        os.makedirs(os.path.dirname(dsn[len("sqlite:///"):]) or ".", exist_ok=True)
    return create_engine(dsn, echo=False, **kwargs)


def init_db(engine: Engine):
    # import models so SQLModel registers the tables
    from bigsmall.db import models  # noqa: F401
    SQLModel.metadata.create_all(engine)


