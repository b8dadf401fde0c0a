"""The 30 Maramataka lunar days, Whiro through Mutuwhenua.

Entries are positioned by days since new moon. ``bite_qualities`` lists the
bite rating for the upper-transit major, lower-transit major, moonrise minor
and moonset minor windows, in that order.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Tuple

from ..schemas import PhaseRecord
from .epochs import LUNAR_DAYS


def _phase(name: str, quality: str, description: str, *bites: str) -> PhaseRecord:
    return PhaseRecord(name=name, quality=quality, description=description, bite_qualities=bites)


MARAMATAKA_PHASES: Tuple[PhaseRecord, ...] = (
    _phase("Whiro", "Poor",
           "The new moon. An unfavourable day for fishing and planting. Energy is low.",
           "poor", "poor", "poor", "poor"),
    _phase("Tirea", "Poor",
           "The first day of the waxing moon. Still a low-energy day, fishing remains poor.",
           "poor", "poor", "poor", "average"),
    _phase("Hoata", "Average",
           "The moon is growing. A better day for fishing as activity begins to increase.",
           "average", "poor", "good", "average"),
    _phase("Oue", "Good",
           "A productive day for fishing and planting. Marine life becomes more active.",
           "good", "average", "good", "good"),
    _phase("Okoro", "Average",
           "A reasonably good day, especially for fishing in the morning.",
           "average", "average", "good", "average"),
    _phase("Tamatea-a-ngana", "Average",
           "The first of the 'Tamatea' variable days. Can be unpredictable.",
           "average", "poor", "average", "poor"),
    _phase("Tamatea-a-hotu", "Poor",
           "A temperamental day with strong winds and rough seas often noted.",
           "poor", "poor", "average", "poor"),
    _phase("Tamatea-a-io", "Average",
           "The weather may start to calm. Fishing can pick up in sheltered areas.",
           "average", "good", "poor", "average"),
    _phase("Tamatea-kai-ariki", "Good",
           "A much calmer and more favourable day for fishing.",
           "good", "average", "good", "average"),
    _phase("Huna", "Poor",
           "'Huna' means hidden. Fish are harder to find and less likely to bite.",
           "poor", "poor", "poor", "poor"),
    _phase("Ari", "Good",
           "A promising day. Good for all types of fishing as the moon nears fullness.",
           "good", "average", "good", "good"),
    _phase("Maure", "Good",
           "Another productive day, with high energy leading up to the full moon.",
           "good", "good", "average", "good"),
    _phase("Mawharu", "Excellent",
           "An excellent day for fishing, often with calm weather. High activity.",
           "excellent", "good", "good", "average"),
    _phase("Atua", "Average",
           "The day before the full moon. Can be good but sometimes unpredictable.",
           "average", "good", "average", "average"),
    _phase("Ohotu", "Good",
           "A favourable day. Fish are feeding actively.",
           "good", "average", "good", "good"),
    _phase("Rakau-nui", "Excellent",
           "The full moon. One of the best days for fishing, especially at night.",
           "excellent", "excellent", "good", "good"),
    _phase("Rakau-matohi", "Excellent",
           "The day after the full moon. Still an excellent time for fishing as activity remains high.",
           "excellent", "excellent", "good", "average"),
    _phase("Takirau", "Good",
           "A very good day for fishing as the moon begins to wane.",
           "good", "good", "excellent", "good"),
    _phase("Oike", "Average",
           "A day of moderate success. The evening bite can be particularly good.",
           "average", "good", "average", "good"),
    _phase("Korekore-te-whiwhia", "Poor",
           "The first of the 'Korekore' (no harvest) days. Fishing is generally poor.",
           "poor", "average", "poor", "poor"),
    _phase("Korekore-te-rawea", "Poor",
           "Another challenging day. It's better to rest and prepare gear.",
           "poor", "poor", "average", "poor"),
    _phase("Korekore-piri-ki-te-Tangaroa", "Average",
           "The last Korekore day, leading into the Tangaroa phase. Activity starts to build.",
           "average", "poor", "good", "average"),
    _phase("Tangaroa-a-mua", "Excellent",
           "An excellent fishing day. The tides are strong, and fish are feeding heavily.",
           "excellent", "good", "excellent", "good"),
    _phase("Tangaroa-a-roto", "Excellent",
           "Another top-tier fishing day. All forms of fishing are highly favoured.",
           "excellent", "good", "excellent", "excellent"),
    _phase("Tangaroa-kiokio", "Good",
           "A very good day for fishing, though energy may be slightly less than the previous two days.",
           "good", "excellent", "good", "good"),
    _phase("Otaane", "Good",
           "A good day for fishing, especially in forests and rivers.",
           "good", "average", "good", "average"),
    _phase("Orongonui", "Excellent",
           "A final excellent day before the moon disappears. A great time for night fishing.",
           "excellent", "good", "good", "good"),
    _phase("Mauri", "Average",
           "Energy is starting to wane. Fishing is best done early in the day.",
           "average", "poor", "good", "poor"),
    _phase("Omutu", "Poor",
           "A low-energy day. Fishing is not recommended.",
           "poor", "poor", "average", "poor"),
    _phase("Mutuwhenua", "Poor",
           "The 'day of death'. The darkest night, unfavourable for fishing.",
           "poor", "poor", "poor", "poor"),
)


class PhaseCatalog:
    """Read-only lookup of phase records by lunar-day index."""

    __slots__ = ("_records",)

    def __init__(self, records: Iterable[PhaseRecord]) -> None:
        records = tuple(records)
        if len(records) != LUNAR_DAYS:
            raise ValueError(f"expected {LUNAR_DAYS} phases, got {len(records)}")
        self._records: Tuple[PhaseRecord, ...] = records

    def get(self, index: int) -> PhaseRecord:
        # Negative indices are rejected rather than wrapped.
        if not 0 <= index < LUNAR_DAYS:
            raise IndexError(f"lunar day index out of range: {index}")
        return self._records[index]

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[PhaseRecord]:
        return iter(self._records)

    def index_of(self, name: str) -> int:
        for idx, record in enumerate(self._records):
            if record.name == name:
                return idx
        raise KeyError(name)


PHASE_CATALOG = PhaseCatalog(MARAMATAKA_PHASES)


__all__ = ["MARAMATAKA_PHASES", "PHASE_CATALOG", "PhaseCatalog"]
