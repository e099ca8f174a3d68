from __future__ import annotations

import logging
import random

from partymgr.config import settings
from partymgr.db.engine import get_sessionmaker, init_store, make_engine
from partymgr.persistence import StateRepository
from partymgr.workflows import PartyManager

DEMO_ROSTER = """staffId,name,department,title,gender
E001,Alice Chen,Engineering,Engineer,F
E002,Bob Lin,Engineering,Senior Engineer,M
E003,Carol Wu,Finance,Accountant,F
E004,David Huang,Finance,Controller,M
E005,Eve Tsai,Marketing,Designer,F
E006,Frank Lee,Marketing,Manager,M
E007,Grace Liu,Sales,Account Executive,F
E008,Henry Wang,Sales,Sales Lead,M
E009,Ivy Chang,Operations,Coordinator,F
E010,Jack Kuo,Operations,Technician,M
E011,Kelly Hsu,Engineering,QA Engineer,F
E012,Leo Yang,"Human Resources",Recruiter,M
"""


def main() -> None:
    """Reset the development store and seed demo prizes, roster and seating."""
    logging.basicConfig(level=settings.log_level)
    engine = make_engine()
    init_store(engine)
    repository = StateRepository(get_sessionmaker(engine))

    # Start from a clean slate so the default prizes are seeded again.
    repository.clear()
    manager = PartyManager.open(repository, rng=random.Random(2024))

    imported = manager.import_employees(DEMO_ROSTER)
    manager.assign_tables(capacity=4, mode="department")

    summary = manager.seating_summary(capacity=4)
    print(
        f"Seeded {len(imported)} employees at {len(manager.state.tables)} tables "
        f"({summary.unassigned} unassigned) and {len(manager.state.prizes)} prizes."
    )


if __name__ == "__main__":
    main()
