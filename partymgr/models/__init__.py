from .base import Base

# import models so metadata.create_all sees every mapped table
from .document import StoredDocument  # noqa: F401
from .employee import DEFAULT_DEPARTMENT, DEFAULT_TITLE, Employee  # noqa: F401
from .prize import Prize, WinnerRecord  # noqa: F401
from .state import AppState  # noqa: F401
from .table import Table  # noqa: F401

__all__ = [
    "Base",
    "StoredDocument",
    "DEFAULT_DEPARTMENT",
    "DEFAULT_TITLE",
    "Employee",
    "Table",
    "Prize",
    "WinnerRecord",
    "AppState",
]
