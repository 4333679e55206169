"""Tests for the concern keyword scanner."""

import pytest

from kinderschutz.safety.scanner import (
    CONCERN_KEYWORDS,
    concern_reason,
    has_pattern,
    is_concerning,
)
from tests.fixtures import bot, user


class TestIsConcerning:
    """Tests for single-message detection."""

    @pytest.mark.parametrize("keyword", CONCERN_KEYWORDS)
    def test_every_keyword_triggers(self, keyword):
        """Test that each configured keyword is detected inside a sentence."""
        assert is_concerning(f"Ich wollte sagen: {keyword} und so") is True

    def test_case_insensitive(self):
        """Test matching ignores case."""
        assert is_concerning("Mein TRAINER war komisch") is True
        assert is_concerning("Ich Habe ANGST") is True

    def test_substring_match_overtriggers(self):
        """Test that keywords inside unrelated words still match."""
        assert is_concerning("Wir haben tolles Teamwork gemacht") is True
        assert is_concerning("Ich mag Schulessen") is True

    def test_umlaut_keywords(self):
        """Test keywords containing umlauts."""
        assert is_concerning("Er hat mich berührt") is True
        assert is_concerning("Ich soll es nicht erzählen") is True

    def test_multi_word_keyword_needs_exact_phrase(self):
        """Test multi-word keywords are matched as exact phrases."""
        assert is_concerning("Das darf ich nicht sagen") is True
        assert is_concerning("Ich kann es nicht so gut sagen") is False

    def test_clean_message(self):
        """Test an ordinary message is not flagged."""
        assert is_concerning("Ich habe heute ein Eis gegessen") is False
        assert is_concerning("") is False

    def test_synonyms_are_missed(self):
        """Test that the tripwire does not catch synonyms."""
        assert is_concerning("Ich fürchte mich") is False


class TestHasPattern:
    """Tests for detecting a concerning theme across recent user turns."""

    def test_two_of_last_three_user_turns(self):
        """Test that two concerning user turns among the last three fire."""
        history = [
            user("Ich bin traurig"),
            bot("Das tut mir leid."),
            user("Heute war es okay"),
            bot("Schön."),
            user("Ich fühle mich allein"),
        ]
        assert has_pattern(history) is True

    def test_single_concerning_turn_is_not_a_pattern(self):
        """Test that one concerning turn is not enough."""
        history = [user("Ich bin traurig"), user("Wir spielen Fußball"), user("Es regnet")]
        assert has_pattern(history) is False

    def test_only_last_three_user_turns_count(self):
        """Test that older concerning turns fall out of the window."""
        history = [
            user("Ich habe Angst"),
            user("Ich bin traurig"),
            user("Wir spielen Fußball"),
            user("Es regnet"),
            user("Ich mag Pizza"),
        ]
        assert has_pattern(history) is False

    def test_bot_turns_are_ignored(self):
        """Test bot turns never count, even with concern keywords."""
        history = [
            bot("Hilfe findest du bei der Nummer gegen Kummer"),
            bot("Das ist nicht deine Schuld, hab keine Angst"),
            user("Okay"),
        ]
        assert has_pattern(history) is False

    def test_bot_turns_do_not_push_user_turns_out(self):
        """Test the window is three user turns, not three turns."""
        history = [
            user("Ich habe Angst"),
            bot("Erzähl mir mehr."),
            bot("Ich bin für dich da."),
            bot("Möchtest du reden?"),
            user("Ich bin traurig"),
        ]
        assert has_pattern(history) is True

    def test_empty_history(self):
        """Test an empty history has no pattern."""
        assert has_pattern([]) is False


class TestConcernReason:
    """Tests for reporting which check fired."""

    def test_message_takes_precedence(self):
        """Test a concerning message is reported as 'message'."""
        history = [user("Ich bin traurig"), user("Ich habe Angst")]
        assert concern_reason("Mein Lehrer", history) == "message"

    def test_pattern(self):
        """Test a concerning history is reported as 'pattern'."""
        history = [user("Ich bin traurig"), user("Ich habe Angst")]
        assert concern_reason("Okay", history) == "pattern"

    def test_none(self):
        """Test nothing fires for a clean conversation."""
        assert concern_reason("Okay", [user("Es regnet")]) is None
