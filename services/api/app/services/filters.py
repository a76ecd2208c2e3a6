"""Character filtering by power range and alignment.

Rules:
- power_min / power_max of 0 mean "unset" (an explicit bound of 0 cannot be
  expressed; it behaves exactly like no bound)
- When any power bound is active, characters whose power is not an integer
  (e.g. "null") are dropped
- alignment match is exact and case-sensitive; "" means no filter
- No active bound and no alignment -> input returned unchanged
"""

from dataclasses import dataclass
import re

from app.schemas import CharacterRecord


@dataclass(frozen=True)
class CharacterFilter:
    power_min: int = 0
    power_max: int = 0
    alignment: str = ""

    @property
    def has_power_bounds(self) -> bool:
        return self.power_min != 0 or self.power_max != 0

    @property
    def is_active(self) -> bool:
        return self.has_power_bounds or bool(self.alignment)


_INTEGER_RE = re.compile(r"[+-]?\d+", re.ASCII)


def _parse_power(raw: str) -> int | None:
    """Parse a plain ASCII integer; anything else (e.g. "null", "4_0") is None."""
    if not isinstance(raw, str):
        return None
    value = raw.strip()
    if not _INTEGER_RE.fullmatch(value):
        return None
    return int(value)


def filter_characters(
    characters: list[CharacterRecord],
    filters: CharacterFilter | None,
) -> list[CharacterRecord]:
    """Apply `filters` to `characters`, preserving order."""
    if filters is None or not filters.is_active:
        return characters

    filtered: list[CharacterRecord] = []
    for character in characters:
        if filters.has_power_bounds:
            power = _parse_power(character.power)
            if power is None:
                continue
            if filters.power_min != 0 and power < filters.power_min:
                continue
            if filters.power_max != 0 and power > filters.power_max:
                continue

        if filters.alignment and character.alignment != filters.alignment:
            continue

        filtered.append(character)

    return filtered
