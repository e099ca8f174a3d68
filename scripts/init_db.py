from __future__ import annotations

import logging

from sqlalchemy import inspect

from partymgr.config import settings
from partymgr.db.engine import init_store, make_engine


def print_tables(engine) -> None:
    """Inspect the configured database and print all table names."""
    insp = inspect(engine)
    print("Current tables:", ", ".join(sorted(insp.get_table_names())))


def main() -> None:
    """Create the local store (if missing) and report the resulting schema."""
    logging.basicConfig(level=settings.log_level)
    engine = make_engine()
    init_store(engine)
    print_tables(engine)


if __name__ == "__main__":
    main()
