"""Tests for the self-destruct ledger, view sessions, ids and countdown."""

import re
import time

import pytest

from app.services.selfdestruct.countdown import SelfDestructCountdown
from app.services.selfdestruct.ids import generate_message_id
from app.services.selfdestruct.ledger import InMemoryLedger, LedgerEntry, ViewSession


class TestInMemoryLedger:
    """Test suite for the dictionary-backed ledger."""

    @pytest.fixture
    def ledger(self):
        return InMemoryLedger()

    def test_register_and_mark(self, ledger):
        ledger.register("msg_1")
        assert not ledger.is_viewed("msg_1")

        assert ledger.mark_viewed("msg_1")
        assert ledger.is_viewed("msg_1")
        assert ledger.get("msg_1").viewed_at is not None

    def test_mark_viewed_twice(self, ledger):
        ledger.register("msg_1")
        ledger.mark_viewed("msg_1")
        first_viewed_at = ledger.get("msg_1").viewed_at

        assert ledger.mark_viewed("msg_1")
        assert ledger.get("msg_1").viewed_at == first_viewed_at

    def test_unknown_id(self, ledger):
        assert not ledger.is_viewed("missing")
        assert not ledger.mark_viewed("missing")

    def test_changed_entries(self):
        ledger = InMemoryLedger([LedgerEntry("old"), LedgerEntry("seen", viewed=True)])
        assert ledger.changed_entries() == []

        ledger.register("new")
        ledger.mark_viewed("old")
        ledger.mark_viewed("seen")

        assert [e.message_id for e in ledger.changed_entries()] == ["new", "old"]


class TestViewSession:
    """Test suite for per-client view sessions."""

    def test_record_displayed(self):
        session = ViewSession("tab-1", {"msg_old"})

        assert session.has_displayed("msg_old")
        assert not session.has_displayed("msg_new")

        session.record_displayed("msg_new")
        session.record_displayed("msg_old")

        assert session.has_displayed("msg_new")
        assert session.newly_displayed() == ["msg_new"]


class TestMessageIds:
    """Test message id generation."""

    def test_format(self):
        assert re.fullmatch(r"msg_\d+_[0-9a-z]{8}", generate_message_id())

    def test_unique(self):
        ids = {generate_message_id() for _ in range(200)}
        assert len(ids) == 200


class TestSelfDestructCountdown:
    """Test suite for the one-shot countdown."""

    def test_fires_once(self):
        calls = []
        countdown = SelfDestructCountdown(0.01, lambda: calls.append(1))

        countdown.start()
        assert countdown.wait(timeout=5)
        assert countdown.expired
        assert not countdown.running
        assert calls == [1]

    def test_cancel_before_expiry(self):
        calls = []
        countdown = SelfDestructCountdown(0.05, lambda: calls.append(1))

        countdown.start()
        countdown.cancel()
        time.sleep(0.1)

        assert not countdown.expired
        assert calls == []

    def test_start_twice(self):
        countdown = SelfDestructCountdown(10)
        countdown.start()
        try:
            with pytest.raises(RuntimeError):
                countdown.start()
        finally:
            countdown.cancel()
