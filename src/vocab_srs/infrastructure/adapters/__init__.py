# Infrastructure Adapters Package
from .deck_file import load_deck, parse_deck
from .memory_repository import InMemoryCardRepository

__all__ = ["InMemoryCardRepository", "load_deck", "parse_deck"]
