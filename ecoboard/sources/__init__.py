"""
Concrete leaderboard entry sources.
"""

from ecoboard.sources.memory import InMemoryEntrySource
from ecoboard.sources.json_file import JsonFileEntrySource
from ecoboard.sources.http import HttpEntrySource

__all__ = ["InMemoryEntrySource", "JsonFileEntrySource", "HttpEntrySource"]
