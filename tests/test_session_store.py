import asyncio
import re
import sys
import unittest
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta, timezone
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.core.session_store import SessionStore, run_periodic_cleanup  # noqa: E402


class FakeClock:
    def __init__(self):
        self.now = datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class SessionStoreTests(unittest.TestCase):
    def setUp(self):
        self.clock = FakeClock()
        self.store = SessionStore(clock=self.clock)

    def test_create_session_initial_state(self):
        session = self.store.create_session()

        self.assertRegex(session.id, re.compile(r"^[0-9a-f]{32}$"))
        self.assertEqual(session.history, [])
        self.assertEqual(session.created_at, self.clock.now)
        self.assertEqual(session.last_activity, self.clock.now)
        self.assertEqual(len(self.store), 1)

    def test_session_ids_are_unique(self):
        ids = {self.store.create_session().id for _ in range(50)}
        self.assertEqual(len(ids), 50)

    def test_get_unknown_session_returns_none(self):
        self.assertIsNone(self.store.get_session("missing"))

    def test_access_within_timeout_extends_life(self):
        session = self.store.create_session()

        self.clock.advance(hours=23, minutes=59)
        found = self.store.get_session(session.id)
        self.assertIs(found, session)
        self.assertEqual(found.last_activity, self.clock.now)

        self.clock.advance(hours=23, minutes=59)
        self.assertIs(self.store.get_session(session.id), session)

    def test_session_at_exact_timeout_is_still_valid(self):
        session = self.store.create_session()
        self.clock.advance(hours=24)
        self.assertIs(self.store.get_session(session.id), session)

    def test_expired_session_is_deleted_on_access(self):
        session = self.store.create_session()
        self.clock.advance(hours=24, seconds=1)

        self.assertIsNone(self.store.get_session(session.id))
        self.assertEqual(len(self.store), 0)

    def test_history_keeps_last_ten_messages_in_order(self):
        session = self.store.create_session()
        for i in range(13):
            role = "user" if i % 2 == 0 else "assistant"
            self.store.add_message(session.id, role, f"message {i}")

        history = self.store.get_history(session.id)
        self.assertEqual(len(history), 10)
        self.assertEqual([m.content for m in history], [f"message {i}" for i in range(3, 13)])

    def test_add_message_records_role_and_timestamp(self):
        session = self.store.create_session()
        self.clock.advance(minutes=5)
        self.store.add_message(session.id, "user", "hello")

        (message,) = self.store.get_history(session.id)
        self.assertEqual(message.role, "user")
        self.assertEqual(message.content, "hello")
        self.assertEqual(message.timestamp, self.clock.now.isoformat())
        self.assertEqual(session.last_activity, self.clock.now)

    def test_add_message_to_unknown_session_is_noop(self):
        with self.assertLogs("app.core.session_store", level="WARNING"):
            self.store.add_message("missing", "user", "hello")
        self.assertEqual(len(self.store), 0)

    def test_get_history_returns_copy(self):
        session = self.store.create_session()
        self.store.add_message(session.id, "user", "hello")

        history = self.store.get_history(session.id)
        history.clear()

        self.assertEqual(len(self.store.get_history(session.id)), 1)

    def test_get_history_for_unknown_session_is_empty(self):
        self.assertEqual(self.store.get_history("missing"), [])

    def test_get_or_create_never_adopts_unknown_id(self):
        first = self.store.get_or_create_session("made-up-id")
        second = self.store.get_or_create_session("made-up-id")

        self.assertNotEqual(first.id, "made-up-id")
        self.assertNotEqual(first.id, second.id)
        self.assertEqual(len(self.store), 2)

    def test_get_or_create_returns_existing_session(self):
        session = self.store.create_session()
        self.assertIs(self.store.get_or_create_session(session.id), session)
        self.assertIs(self.store.get_or_create_session(session.id), session)
        self.assertEqual(len(self.store), 1)

    def test_get_or_create_replaces_expired_session(self):
        session = self.store.create_session()
        self.clock.advance(days=2)

        replacement = self.store.get_or_create_session(session.id)
        self.assertNotEqual(replacement.id, session.id)
        self.assertIsNone(self.store.get_session(session.id))

    def test_clear_session(self):
        session = self.store.create_session()
        self.assertTrue(self.store.clear_session(session.id))
        self.assertFalse(self.store.clear_session(session.id))
        self.assertIsNone(self.store.get_session(session.id))

    def test_cleanup_removes_only_expired_sessions(self):
        old = self.store.create_session()
        self.clock.advance(hours=20)
        fresh = self.store.create_session()
        self.clock.advance(hours=5)

        self.assertEqual(self.store.cleanup_expired_sessions(), 1)
        self.assertIsNone(self.store.get_session(old.id))
        self.assertIs(self.store.get_session(fresh.id), fresh)
        self.assertEqual(self.store.cleanup_expired_sessions(), 0)

    def test_stats(self):
        self.assertEqual(self.store.get_stats().total_sessions, 0)
        self.assertEqual(self.store.get_stats().average_history_length, 0)

        first = self.store.create_session()
        self.clock.advance(minutes=90)
        second = self.store.create_session()
        for text in ("a", "b", "c"):
            self.store.add_message(first.id, "user", text)
        self.store.add_message(second.id, "user", "d")

        stats = self.store.get_stats()
        self.assertEqual(stats.total_sessions, 2)
        self.assertEqual(sorted(stats.session_ages), [0, 90])
        self.assertEqual(stats.average_history_length, 2.0)

    def test_concurrent_appends_respect_history_bound(self):
        store = SessionStore()
        session = store.create_session()

        def append(i: int) -> None:
            store.add_message(session.id, "user", f"m{i}")

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(append, range(400)))

        self.assertEqual(len(store.get_history(session.id)), 10)

    def test_rejects_non_positive_history_bound(self):
        with self.assertRaises(ValueError):
            SessionStore(max_history=0)


class PeriodicCleanupTests(unittest.TestCase):
    def test_sweeps_immediately_and_stops_on_event(self):
        clock = FakeClock()
        store = SessionStore(clock=clock)
        store.create_session()
        clock.advance(days=1, seconds=1)

        async def scenario():
            stop_event = asyncio.Event()
            task = asyncio.create_task(run_periodic_cleanup(store, stop_event, interval_s=3600))
            await asyncio.sleep(0)
            await asyncio.sleep(0)
            swept = len(store)
            stop_event.set()
            await asyncio.wait_for(task, timeout=1)
            return swept

        self.assertEqual(asyncio.run(scenario()), 0)

    def test_repeats_on_interval(self):
        clock = FakeClock()
        store = SessionStore(clock=clock)

        async def scenario():
            stop_event = asyncio.Event()
            task = asyncio.create_task(run_periodic_cleanup(store, stop_event, interval_s=0.01))
            await asyncio.sleep(0)
            store.create_session()
            clock.advance(days=2)
            await asyncio.sleep(0.05)
            remaining = len(store)
            stop_event.set()
            await asyncio.wait_for(task, timeout=1)
            return remaining

        self.assertEqual(asyncio.run(scenario()), 0)


if __name__ == "__main__":
    unittest.main()
