import os
import unittest
from unittest.mock import patch

from partymgr.config import Settings


class SettingsTestCase(unittest.TestCase):
    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            cfg = Settings.from_env()
        self.assertEqual(cfg.storage_key, "party_manager_db_v1")
        self.assertEqual(cfg.default_table_capacity, 10)
        self.assertEqual(cfg.max_draw_batch, 10)
        self.assertEqual(cfg.log_level, "INFO")

    def test_environment_overrides(self):
        env = {
            "DB_URL": "sqlite+pysqlite:///:memory:",
            "PARTY_STORAGE_KEY": "gala_2025",
            "DEFAULT_TABLE_CAPACITY": "12",
            "SPIN_DURATION_SECONDS": "1.5",
            "LOG_LEVEL": "debug",
        }
        with patch.dict(os.environ, env, clear=True):
            cfg = Settings.from_env()
        self.assertEqual(cfg.db_url, "sqlite+pysqlite:///:memory:")
        self.assertEqual(cfg.storage_key, "gala_2025")
        self.assertEqual(cfg.default_table_capacity, 12)
        self.assertEqual(cfg.spin_duration_seconds, 1.5)
        self.assertEqual(cfg.log_level, "DEBUG")

    def test_invalid_integer_raises(self):
        with patch.dict(os.environ, {"MAX_DRAW_BATCH": "many"}, clear=True):
            with self.assertRaises(ValueError):
                Settings.from_env()


if __name__ == "__main__":
    unittest.main()
