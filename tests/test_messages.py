"""Tests for not-found messages."""

import random

from frankenbite_mcp.messages import NOT_FOUND_MESSAGES, get_not_found_message


class TestNotFoundMessage:
    def test_from_fixed_list(self):
        assert get_not_found_message() in NOT_FOUND_MESSAGES

    def test_reproducible_with_seeded_rng(self):
        first = get_not_found_message(random.Random(42))
        second = get_not_found_message(random.Random(42))
        assert first == second

    def test_uses_injected_rng(self):
        class FirstChoice:
            def choice(self, seq):
                return seq[0]

        assert get_not_found_message(FirstChoice()) == NOT_FOUND_MESSAGES[0]
