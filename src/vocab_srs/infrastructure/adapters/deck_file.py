"""
Deck files: scheduling records stored as a YAML list of mappings.

Each entry holds the SpacedRepetitionCard fields by name. Timestamps may be
YAML timestamps or ISO strings; values without an offset are read as UTC.
"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import yaml

from vocab_srs.domain.errors import InvalidInputError
from vocab_srs.domain.models import SpacedRepetitionCard

logger = logging.getLogger(__name__)

_TIMESTAMP_FIELDS = ("next_review", "created_at", "updated_at", "last_reviewed")


def _as_utc(value: Any, field_name: str) -> Any:
    if value is None:
        return None
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value)
        except ValueError:
            raise InvalidInputError(f"{field_name}: invalid timestamp {value!r}") from None
    if isinstance(value, datetime) and value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def parse_deck(entries: Any) -> list[SpacedRepetitionCard]:
    """
    Build cards from already-parsed YAML data.

    Raises:
        InvalidInputError: If the data is not a list of card mappings.
        InvariantViolationError: If a card breaks a scheduling invariant.
    """
    if entries is None:
        return []
    if not isinstance(entries, list):
        raise InvalidInputError("Deck must be a list of cards")

    cards = []
    for i, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise InvalidInputError(f"Deck entry {i} is not a mapping")
        fields = dict(entry)
        for name in _TIMESTAMP_FIELDS:
            if name in fields:
                fields[name] = _as_utc(fields[name], name)
        try:
            cards.append(SpacedRepetitionCard(**fields))
        except TypeError as e:
            raise InvalidInputError(f"Deck entry {i}: {e}") from None
    return cards


def load_deck(path: Path) -> list[SpacedRepetitionCard]:
    """Read a deck file from disk."""
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise InvalidInputError(f"Could not parse deck {path}: {e}") from None

    cards = parse_deck(data)
    logger.debug(f"Loaded {len(cards)} cards from {path}")
    return cards
