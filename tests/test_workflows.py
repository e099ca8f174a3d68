import random
import unittest
from datetime import timezone

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from partymgr.config import Settings
from partymgr.exceptions import (
    EmployeeNotFoundError,
    ImportFormatError,
    InsufficientPoolError,
    PrizeExhaustedError,
    ValidationError,
)
from partymgr.models import AppState, Base
from partymgr.persistence import DEFAULT_PRIZES, StateRepository
from partymgr.workflows import PartyManager

ROSTER = """staffId,name,department,title
E1,Ann,Sales,Rep
E2,Ben,Engineering,Dev
E3,Cat,Sales,Lead
E4,Dan,Finance,Clerk
E5,Eve,Engineering,QA
"""


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.now += seconds


class PartyManagerTestCase(unittest.TestCase):
    def setUp(self):
        self.engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
        Base.metadata.create_all(self.engine)
        self.Session = sessionmaker(
            bind=self.engine, future=True, expire_on_commit=False
        )
        self.repo = StateRepository(self.Session)
        self.manager = PartyManager.open(
            self.repo,
            rng=random.Random(42),
            clock=lambda: 1704112496000,
            settings=Settings(spin_duration_seconds=0.5, spin_fps=10),
        )

    def tearDown(self):
        self.engine.dispose()

    def _stored(self) -> AppState:
        state = self.repo.load()
        assert state is not None
        return state

    def test_open_seeds_default_prizes_once(self):
        self.assertEqual(self.manager.state.prizes, DEFAULT_PRIZES)
        self.assertEqual(self._stored(), self.manager.state)

        self.manager.add_prize("Mug", 20)
        reopened = PartyManager.open(self.repo)
        self.assertEqual(len(reopened.state.prizes), 4)

    def test_every_mutation_is_persisted(self):
        emp = self.manager.add_employee(staff_id="S1", name="Zoe", department="Ops")
        self.assertEqual(self._stored(), self.manager.state)

        self.manager.update_employee(emp.id, title="Manager")
        self.assertEqual(self._stored().employee_by_id(emp.id).title, "Manager")

        self.manager.remove_employee(emp.id)
        self.assertIsNone(self._stored().employee_by_id(emp.id))

    def test_failed_operations_leave_state_and_store_untouched(self):
        before = self.manager.state
        with self.assertRaises(ValidationError):
            self.manager.add_employee(staff_id="", name="Nobody")
        with self.assertRaises(EmployeeNotFoundError):
            self.manager.remove_employee("missing")
        with self.assertRaises(ImportFormatError):
            self.manager.import_employees(b"\xff\xfe")
        self.assertIs(self.manager.state, before)
        self.assertEqual(self._stored(), before)

    def test_import_search_and_clear(self):
        appended = self.manager.import_employees(ROSTER)
        self.assertEqual(len(appended), 5)
        self.assertEqual(len(self._stored().employees), 5)
        self.assertEqual(
            sorted(e.name for e in self.manager.search_employees("engineering")),
            ["Ben", "Eve"],
        )

        self.manager.clear_employees()
        self.assertEqual(self._stored().employees, ())

    def test_assign_move_and_clear_tables(self):
        self.manager.import_employees(ROSTER)
        state = self.manager.assign_tables(capacity=2, mode="department")
        self.assertEqual(len(state.tables), 3)
        self.assertEqual(self._stored().tables, state.tables)
        self.assertEqual(
            [e.department for e in state.employees],
            ["Engineering", "Engineering", "Finance", "Sales", "Sales"],
        )

        mover = next(e for e in state.employees if e.table_id == "3")
        occupancy = self.manager.move_employee(mover.id, "1")
        self.assertTrue(occupancy.is_over_capacity)
        self.assertEqual(self.manager.seating_summary(2).over_capacity_tables, ("1",))

        self.manager.clear_tables()
        stored = self._stored()
        self.assertEqual(stored.tables, ())
        self.assertTrue(all(e.table_id is None for e in stored.employees))

    def test_assign_with_empty_roster_is_a_no_op(self):
        before = self.manager.state
        self.assertIs(self.manager.assign_tables(capacity=4), before)
        self.assertEqual(self.manager.state.tables, ())

    def test_spin_then_commit(self):
        self.manager.import_employees(ROSTER)
        pending = self.manager.start_draw("p2", batch_size=2)
        frames = []
        clock = FakeClock()
        shown = pending.run_spin(frames.append, clock=clock, sleep=clock.sleep)
        self.assertEqual(shown, len(frames))
        self.assertGreater(shown, 0)
        # Spinning never touches the stored state.
        self.assertEqual(self._stored().winners, ())

        outcome = pending.commit()
        self.assertTrue(pending.spin.cancelled)
        self.assertEqual(len(outcome.winners), 2)
        self.assertEqual(self.manager.state, outcome.state)
        self.assertEqual(self._stored(), outcome.state)
        self.assertEqual(self.manager.remaining_slots("p2"), 1)

        # A cancelled spin renders nothing more.
        count = len(frames)
        pending.spin.run(frames.append, duration=1.0, fps=10, clock=clock, sleep=clock.sleep)
        self.assertEqual(len(frames), count)

    def test_draw_rejections_happen_before_spin(self):
        self.manager.import_employees(ROSTER)
        with self.assertRaises(InsufficientPoolError):
            self.manager.start_draw("p3", batch_size=6)
        self.manager.draw("p1")
        with self.assertRaises(PrizeExhaustedError):
            self.manager.start_draw("p1")
        self.assertEqual(len(self._stored().winners), 1)

    def test_reset_draw_and_export(self):
        self.manager.import_employees(ROSTER)
        self.manager.assign_tables(capacity=5, mode="random")
        outcome = self.manager.draw("p3", batch_size=3)

        exported = self.manager.export_winners_csv(tz=timezone.utc)
        self.assertEqual(len(exported.strip().splitlines()), 4)
        for winner in outcome.winners:
            self.assertIn(winner.name, exported)
        self.assertIn("12:34:56", exported)

        tables = self.manager.state.tables
        self.manager.reset_draw()
        once = self._stored()
        self.manager.reset_draw()
        self.assertEqual(self._stored(), once)
        self.assertEqual(once.winners, ())
        self.assertFalse(any(e.is_winner or e.prize_won for e in once.employees))
        self.assertEqual(once.tables, tables)
        self.assertEqual(once.prizes, DEFAULT_PRIZES)


if __name__ == "__main__":
    unittest.main()
