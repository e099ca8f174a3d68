from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from ..config import ROOT_DIR, settings
from .utils import resolve_sqlite_url

DEFAULT_SQLITE_URL = resolve_sqlite_url(settings.db_url, ROOT_DIR)


def make_engine(database_url: Optional[str] = None, echo: bool = False):
    url = database_url or DEFAULT_SQLITE_URL
    return create_engine(
        url,
        echo=echo,
        future=True,
    )


def get_sessionmaker(engine):
    return sessionmaker(
        bind=engine,
        expire_on_commit=False,  # Keep stored documents readable after commit
        future=True,
    )


def init_store(engine) -> None:
    """Create the key/value table backing the state document if missing."""
    from ..models import Base

    Base.metadata.create_all(engine)
