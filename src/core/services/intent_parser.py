"""Free-text to `Intent` classification.

Rules are an ordered table of `(predicate, intent type, extractor)` entries.
The first predicate that matches decides the type; declaration order is the
tie-break. Parsing is pure and never raises: anything unmatched becomes an
`unknown` intent carrying the original text.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Sequence

from core.domain.intent import Intent, IntentType

Predicate = Callable[[str], bool]
Extractor = Callable[[str], dict[str, str]]

_PUBKEY_RE = re.compile(r"\b(0[23][0-9a-fA-F]{64})\b")
_SHORT_CHANNEL_ID_RE = re.compile(r"\b(\d+x\d+x\d+)\b")
_CHAN_ID_RE = re.compile(r"\bchannel\s+(?:id\s+)?#?(\d{6,20})\b", re.IGNORECASE)


@dataclass(frozen=True)
class IntentRule:
    """One classification rule."""

    name: str
    predicate: Predicate
    intent_type: IntentType
    extractor: Extractor


def keyword_predicate(*patterns: str) -> Predicate:
    """Match when any of the regex `patterns` appears (case-insensitive)."""

    compiled = re.compile("|".join(f"(?:{p})" for p in patterns), re.IGNORECASE)

    def _match(text: str) -> bool:
        return compiled.search(text) is not None

    return _match


def extract_channel_parameters(text: str) -> dict[str, str]:
    """Pull peer/channel identifiers out of the query text, if any."""

    params: dict[str, str] = {}
    pubkey = _PUBKEY_RE.search(text)
    if pubkey:
        params["pubkey"] = pubkey.group(1).lower()
    scid = _SHORT_CHANNEL_ID_RE.search(text)
    if scid:
        params["channel_id"] = scid.group(1)
    else:
        chan_id = _CHAN_ID_RE.search(text)
        if chan_id:
            params["channel_id"] = chan_id.group(1)
    return params


DEFAULT_RULES: tuple[IntentRule, ...] = (
    IntentRule(
        name="liquidity",
        predicate=keyword_predicate(
            r"\bliquidity\b",
            r"\binbound\b",
            r"\boutbound\b",
            r"\bbalances?\b",
            r"\bcan i (?:send|receive)\b",
            r"\bhow much can i\b",
        ),
        intent_type=IntentType.CHANNEL_LIQUIDITY,
        extractor=extract_channel_parameters,
    ),
    IntentRule(
        name="health",
        predicate=keyword_predicate(
            r"\bhealth(?:y)?\b",
            r"\bunhealthy\b",
            r"\binactive\b",
            r"\boffline\b",
            r"\bstatus\b",
            r"\bproblems?\b",
            r"\bissues?\b",
        ),
        intent_type=IntentType.CHANNEL_HEALTH,
        extractor=extract_channel_parameters,
    ),
    IntentRule(
        name="list",
        predicate=keyword_predicate(
            r"\blist\b.*\bchannels?\b",
            r"\bshow\b.*\bchannels?\b",
            r"\bmy channels\b",
            r"\bwhat channels\b",
            r"\bhow many channels\b",
            r"^\s*channels\s*\??\s*$",
        ),
        intent_type=IntentType.CHANNEL_LIST,
        extractor=extract_channel_parameters,
    ),
)


class IntentParser:
    """Classifies raw text with an ordered rule table."""

    def __init__(self, rules: Sequence[IntentRule] | None = None) -> None:
        self._rules: tuple[IntentRule, ...] = tuple(rules) if rules is not None else DEFAULT_RULES

    @property
    def rules(self) -> tuple[IntentRule, ...]:
        return self._rules

    def parse(self, text: str) -> Intent:
        query = text if isinstance(text, str) else ""
        if not query.strip():
            return Intent(type=IntentType.UNKNOWN, query=query)

        for rule in self._rules:
            if rule.predicate(query):
                return Intent(
                    type=rule.intent_type,
                    query=query,
                    parameters=rule.extractor(query),
                )
        return Intent(type=IntentType.UNKNOWN, query=query)


_default_parser = IntentParser()


def parse_intent(text: str) -> Intent:
    return _default_parser.parse(text)
