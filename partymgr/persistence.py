"""Persistence adapter: the whole AppState as one document in the local store."""

from __future__ import annotations

import json
import logging
from typing import Optional

from sqlalchemy.orm import Session, sessionmaker

from .config import settings
from .models import AppState, Prize, StoredDocument

logger = logging.getLogger(__name__)

STORAGE_KEY = settings.storage_key

# Seeded only when the store has never been written.
DEFAULT_PRIZES: tuple[Prize, ...] = (
    Prize(id="p1", name="Grand Prize: iPhone 15 Pro", count=1),
    Prize(id="p2", name="Second Prize: iPad Air", count=3),
    Prize(id="p3", name="Third Prize: 5000 Gift Voucher", count=10),
)


class StateRepository:
    """Load and save :class:`AppState` snapshots under a fixed key.

    Every save replaces the stored document wholesale (last write wins). There
    is no schema versioning; a document that does not parse is treated as
    empty rather than raising.
    """

    def __init__(
        self,
        session_factory: sessionmaker[Session],
        *,
        key: Optional[str] = None,
    ) -> None:
        self._session_factory = session_factory
        self.key = key or STORAGE_KEY

    def load(self) -> Optional[AppState]:
        """Return the stored state.

        Returns
        -------
        Optional[AppState]
            ``None`` when nothing was ever stored, ``AppState.empty()`` when the
            stored document is malformed, otherwise the decoded state.
        """
        with self._session_factory() as session:
            document = StoredDocument.get_by_key(session, self.key)
            raw = document.value if document is not None else None

        if raw is None:
            logger.info(f"No stored state under '{self.key}'")
            return None

        try:
            state = AppState.from_json(json.loads(raw))
        except (ValueError, TypeError, KeyError, RecursionError) as exc:
            logger.warning(f"Stored state under '{self.key}' is unreadable: {exc}")
            return AppState.empty()

        logger.info(
            f"Loaded state: {len(state.employees)} employee(s), "
            f"{len(state.tables)} table(s), {len(state.prizes)} prize(s), "
            f"{len(state.winners)} winner record(s)"
        )
        return state

    def load_or_seed(self) -> AppState:
        """Load the stored state, seeding the default prizes on first run."""
        state = self.load()
        if state is None:
            state = AppState(prizes=DEFAULT_PRIZES)
            self.save(state)
        return state

    def save(self, state: AppState) -> None:
        """Write ``state`` as one document, replacing what was stored."""
        payload = state.to_json_str()
        self.save_raw(payload)
        logger.debug(f"Saved state under '{self.key}' ({len(payload)} bytes)")

    def save_raw(self, value: str) -> None:
        """Store ``value`` verbatim (used to import or inspect raw documents)."""
        with self._session_factory.begin() as session:
            document = StoredDocument.get_by_key(session, self.key)
            if document is None:
                session.add(StoredDocument(key=self.key, value=value))
            else:
                document.value = value

    def clear(self) -> None:
        """Delete the stored document so the next load reports no prior state."""
        with self._session_factory.begin() as session:
            document = StoredDocument.get_by_key(session, self.key)
            if document is not None:
                session.delete(document)
        logger.info(f"Cleared stored state under '{self.key}'")


__all__ = ["DEFAULT_PRIZES", "STORAGE_KEY", "StateRepository"]
