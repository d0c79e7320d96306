#!/usr/bin/env python3
"""
Tests for the DBClient class.
"""

import sys
import unittest
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.pool import StaticPool

# Add the parent directory to the Python path
sys.path.append(str(Path(__file__).parent.parent))

from db.db_client import DBClient
from db.models import FunctionRecord

ASSISTANT_ID = "3f1c2a9e-6d4b-4f0e-9a51-0c7d8e2b1a44"
USER_ID = "9b2e7c10-1f3a-4d5e-8c6b-2a4f0e9d7b31"


def make_record(name, **kwargs):
    return FunctionRecord(assistant_id=ASSISTANT_ID, user_id=USER_ID, name=name, **kwargs)


class TestDBClient(unittest.TestCase):
    """Test cases for DBClient against in-memory SQLite."""

    def setUp(self):
        engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        self.client = DBClient(engine)
        self.client.create_tables()

    def test_create_returns_detached_copy(self):
        created = self.client.create(make_record("weather", parameters={"type": "object"}))

        self.assertIsNotNone(created.id)
        self.assertIsNotNone(created.created_at)
        # Attributes stay readable outside any session
        self.assertEqual(created.parameters, {"type": "object"})

    def test_get_by_id(self):
        created = self.client.create(make_record("weather"))

        self.assertEqual(self.client.get_by_id(FunctionRecord, created.id).name, "weather")
        self.assertIsNone(self.client.get_by_id(FunctionRecord, created.id + 100))

    def test_query_filters_and_orders(self):
        for name in ("b", "a", "b"):
            self.client.create(make_record(name))

        records = self.client.query(FunctionRecord, name="b")

        self.assertEqual(len(records), 2)
        self.assertLess(records[0].id, records[1].id)

    def test_delete(self):
        created = self.client.create(make_record("weather"))

        self.assertTrue(self.client.delete(FunctionRecord, created.id))
        self.assertFalse(self.client.delete(FunctionRecord, created.id))

    def test_session_rolls_back_on_error(self):
        with self.assertRaises(IntegrityError):
            with self.client.session_scope() as session:
                session.add(make_record("kept"))
                session.flush()
                session.add(FunctionRecord(assistant_id=ASSISTANT_ID, user_id=USER_ID, name=None))
                session.flush()

        self.assertEqual(self.client.query(FunctionRecord), [])


if __name__ == "__main__":
    unittest.main()
