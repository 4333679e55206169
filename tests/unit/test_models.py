"""Tests for the shared data models."""

import dataclasses

import pytest

from kinderschutz.models import (
    CompletionResult,
    Origin,
    Sender,
    Turn,
    recent_turns,
    user_turns,
)
from tests.fixtures import bot, user


class TestTurn:
    """Tests for the Turn dataclass."""

    def test_roles(self):
        """Test senders map to chat-completion roles."""
        assert user("Hallo").role == "user"
        assert bot("Hallo").role == "assistant"

    def test_immutable(self):
        """Test turns cannot be modified after creation."""
        turn = user("Hallo")
        with pytest.raises(dataclasses.FrozenInstanceError):
            turn.text = "Anders"

    def test_blank_user_text_rejected(self):
        """Test user turns need text."""
        with pytest.raises(ValueError):
            Turn(sender=Sender.USER, text="   ")

    def test_blank_bot_text_allowed(self):
        """Test bot turns may be empty."""
        assert Turn(sender=Sender.BOT, text="").text == ""

    def test_from_dict(self):
        """Test parsing the wire shape."""
        turn = Turn.from_dict({"sender": "bot", "text": "Hi", "isError": True})

        assert turn.sender is Sender.BOT
        assert turn.text == "Hi"
        assert turn.is_error is True

    def test_from_dict_defaults(self):
        """Test isError defaults to False."""
        assert Turn.from_dict({"sender": "user", "text": "Hi"}).is_error is False

    def test_from_dict_unknown_sender(self):
        """Test unknown senders are rejected."""
        with pytest.raises(ValueError, match="Unknown sender"):
            Turn.from_dict({"sender": "admin", "text": "Hi"})

    def test_from_dict_missing_text(self):
        """Test non-string text is rejected."""
        with pytest.raises(ValueError, match="must be a string"):
            Turn.from_dict({"sender": "user"})

    def test_to_dict_round_trip(self):
        """Test the wire shape survives a round trip."""
        data = {"sender": "user", "text": "Hi", "isError": False}
        assert Turn.from_dict(data).to_dict() == data


class TestWindows:
    """Tests for the conversation window helpers."""

    def test_recent_turns(self):
        """Test the last N turns are kept in order."""
        turns = [user(f"nachricht {i}") for i in range(7)]
        window = recent_turns(turns, 5)

        assert [t.text for t in window] == [f"nachricht {i}" for i in range(2, 7)]

    def test_recent_turns_shorter_history(self):
        """Test a short history is returned whole."""
        turns = [user("eins"), bot("zwei")]
        assert recent_turns(turns, 5) == tuple(turns)

    def test_user_turns(self):
        """Test only user turns are selected."""
        turns = [user("a1"), bot("b1"), user("a2"), bot("b2"), user("a3"), user("a4")]
        assert [t.text for t in user_turns(turns, 3)] == ["a2", "a3", "a4"]

    def test_zero_limit(self):
        """Test a zero limit yields nothing."""
        assert recent_turns([user("a")], 0) == ()
        assert user_turns([user("a")], 0) == []


class TestCompletionResult:
    """Tests for CompletionResult."""

    @pytest.mark.parametrize(
        "origin,expected",
        [
            (Origin.API, True),
            (Origin.FALLBACK, True),
            (Origin.TIMEOUT, False),
            (Origin.AUTH_ERROR, False),
            (Origin.ERROR, False),
            (Origin.SAFETY, False),
            (Origin.CACHE, False),
        ],
    )
    def test_cacheable(self, origin, expected):
        """Test which origins are cached."""
        assert CompletionResult(text="x", origin=origin).cacheable is expected

    def test_origin_values(self):
        """Test origin tags used on the wire."""
        assert Origin.AUTH_ERROR.value == "auth_error"
        assert Origin.API == "api"
