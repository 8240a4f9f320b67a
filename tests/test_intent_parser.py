"""
Tests for the free-text intent parser.

Covers rule priority, parameter extraction and the never-fail contract.
"""

import pytest

from conftest import pubkey
from core.domain.intent import Intent, IntentType
from core.services.intent_parser import (
    DEFAULT_RULES,
    IntentParser,
    IntentRule,
    extract_channel_parameters,
    keyword_predicate,
    parse_intent,
)


class TestClassification:

    @pytest.mark.parametrize("text", [
        "list my channels",
        "Show me all channels",
        "what channels do I have?",
        "how many channels are open",
        "channels",
    ])
    def test_channel_list(self, text):
        assert parse_intent(text).type == IntentType.CHANNEL_LIST

    @pytest.mark.parametrize("text", [
        "how healthy are my channels?",
        "channel health please",
        "are any channels inactive",
        "any problems with my node",
    ])
    def test_channel_health(self, text):
        assert parse_intent(text).type == IntentType.CHANNEL_HEALTH

    @pytest.mark.parametrize("text", [
        "what's my liquidity",
        "how much inbound capacity do I have",
        "show channel balances",
        "can I receive 1M sats?",
    ])
    def test_channel_liquidity(self, text):
        assert parse_intent(text).type == IntentType.CHANNEL_LIQUIDITY

    def test_first_matching_rule_wins(self):
        # Matches liquidity, health and list; liquidity is declared first.
        intent = parse_intent("list channel liquidity and health")
        assert intent.type == IntentType.CHANNEL_LIQUIDITY

    def test_health_beats_list(self):
        assert parse_intent("list unhealthy channels").type == IntentType.CHANNEL_HEALTH

    def test_rule_order(self):
        assert [r.name for r in DEFAULT_RULES] == ["liquidity", "health", "list"]


class TestUnknown:

    @pytest.mark.parametrize("text", ["", "   ", "pay this invoice", "hello there"])
    def test_unmatched_text_is_unknown(self, text):
        intent = parse_intent(text)
        assert intent.type == IntentType.UNKNOWN
        assert intent.query == text
        assert intent.parameters == {}

    def test_non_string_input_does_not_raise(self):
        intent = IntentParser().parse(None)
        assert intent.type == IntentType.UNKNOWN

    def test_query_is_preserved(self):
        assert parse_intent("List my Channels").query == "List my Channels"


class TestParameters:

    def test_extracts_pubkey(self):
        key = pubkey(7)
        intent = parse_intent(f"show channel health for {key.upper()}")
        assert intent.parameters["pubkey"] == key

    def test_extracts_short_channel_id(self):
        params = extract_channel_parameters("liquidity of 812345x1234x1")
        assert params == {"channel_id": "812345x1234x1"}

    def test_extracts_numeric_channel_id(self):
        params = extract_channel_parameters("health of channel 896554212245651457")
        assert params == {"channel_id": "896554212245651457"}

    def test_no_parameters(self):
        assert extract_channel_parameters("list my channels") == {}


class TestCustomRules:

    def test_custom_rule_table(self):
        rules = [
            IntentRule(
                name="capacity",
                predicate=keyword_predicate(r"\bcapacity\b"),
                intent_type=IntentType.CHANNEL_LIQUIDITY,
                extractor=lambda text: {"focus": "capacity"},
            )
        ]
        parser = IntentParser(rules)
        intent = parser.parse("total capacity?")
        assert intent.type == IntentType.CHANNEL_LIQUIDITY
        assert intent.parameters == {"focus": "capacity"}
        assert parser.parse("list my channels").type == IntentType.UNKNOWN

    def test_intent_is_immutable(self):
        intent = parse_intent("list my channels")
        assert isinstance(intent, Intent)
        with pytest.raises(Exception):
            intent.query = "changed"
