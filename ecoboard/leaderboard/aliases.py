"""
Display pseudonyms for leaderboard entries.

Self-chosen readable names are shown as-is. Generated or internal ids are
replaced by an eco-themed alias picked by leaderboard position, so the same
(id, position) pair always yields the same name.
"""

import re
from typing import Iterable, Optional, Pattern, Sequence, Tuple


DEFAULT_ECO_ALIASES: Tuple[str, ...] = (
    "EcoChampion", "GreenGuru", "EcoWarrior", "NatureLover", "EcoFriend",
    "TreeHugger", "GreenThumb", "EcoHero", "PlanetGuard", "GreenKnight",
    "EcoMaster", "LeafWhisper", "GreenSage", "EcoExplorer", "NatureWise",
    "EcoVibes", "GreenSpark", "EcoStar", "GreenWave", "EcoSpirit",
)

DEFAULT_INTERNAL_ID_PATTERNS: Tuple[str, ...] = (
    r"demo_user",
    r"user_",
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$",
)

MIN_ALIAS_LENGTH = 8


class AliasGenerator:
    """
    Deterministic pseudonym generator.

    Example:
        gen = AliasGenerator()
        gen.generate("demo_user_7", 0)     # "EcoChampion"
        gen.generate("SolarSailor42", 3)   # "SolarSailor42"
        gen.generate("user_99", 25)        # "EcoUser26"
    """

    def __init__(
        self,
        aliases: Sequence[str] = DEFAULT_ECO_ALIASES,
        internal_id_patterns: Iterable[str] = DEFAULT_INTERNAL_ID_PATTERNS,
        min_length: int = MIN_ALIAS_LENGTH,
    ):
        """
        Args:
            aliases: Ordered alias names; stored as an immutable tuple
            internal_id_patterns: Regexes (searched anywhere in the id) that
                mark an id as system-generated
            min_length: Ids must be longer than this to count as readable
        """
        self.aliases: Tuple[str, ...] = tuple(aliases)
        self.patterns: Tuple[Pattern[str], ...] = tuple(
            re.compile(p) for p in internal_id_patterns
        )
        self.min_length = min_length

    def is_readable(self, user_id: Optional[str]) -> bool:
        """True if the id looks like a self-chosen display name."""
        if not user_id or len(user_id) <= self.min_length:
            return False
        return not any(p.search(user_id) for p in self.patterns)

    def generate(self, user_id: Optional[str], position: int) -> str:
        """
        Return the display alias for an entry.

        Args:
            user_id: Raw identifier of the entry
            position: 0-based leaderboard position

        Raises:
            ValueError: If position is negative
        """
        if position < 0:
            raise ValueError(f"position must be >= 0, got {position}")
        if self.is_readable(user_id):
            return user_id
        if position < len(self.aliases):
            return self.aliases[position]
        return f"EcoUser{position + 1}"
