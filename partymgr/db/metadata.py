from sqlalchemy import MetaData

# Naming convention keeps constraint names stable across SQLite rebuilds.
metadata_obj = MetaData(
    naming_convention={
        "ix": "ix_%(column_0_label)s",
        "uq": "%(table_name)s_%(column_0_name)s_key",
        "pk": "%(table_name)s_pkey",
    }
)
