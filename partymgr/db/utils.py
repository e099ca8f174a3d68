from pathlib import Path
from datetime import datetime, timezone
from typing import Optional


def resolve_sqlite_url(url: str, project_root: Path) -> str:
    """Resolve 'sqlite:///./relative/path' to an absolute sqlite:/// URL.

    Keeps other URL forms (including in-memory SQLite) unchanged.
    """
    prefix = "sqlite:///./"
    if not url.startswith(prefix):
        return url
    rel = url[len(prefix) :]
    return f"sqlite:///{(project_root / rel).resolve()}"


def epoch_ms_to_local(timestamp_ms: int, tz: Optional[timezone] = None) -> datetime:
    """Convert an epoch-millisecond timestamp to an aware local datetime.

    ``tz`` defaults to the machine's local zone; tests pass UTC to stay stable.
    """
    dt = datetime.fromtimestamp(timestamp_ms / 1000, tz=timezone.utc)
    return dt.astimezone(tz)
