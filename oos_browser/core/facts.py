from __future__ import annotations

from typing import List, Sequence

FACTS: List[str] = [
    "Early marriage and child labor contribute to high out-of-school rates, especially among girls.",
    "Mongolia utilizes mobile classrooms to reach nomadic communities.",
    "In developing nations flooding can disrupt transportation to schools, exacerbating out-of-school challenges.",
    "The countries in which the share of children who are not in school is low (lower than 5%) all have a GDP "
    "per capita above $35,000.",
    "Free meals in schools is proven as the best policy yet, it gives incentives to parents to send their "
    "children to school.",
    "Half of all out-of-school children live in conflict-affected countries.",
    "In some areas, traditional gender roles limit educational opportunities for girls, perpetuating gender "
    "disparities.",
    "Of the world's 787 million children of primary school age, 8% do not go to school.",
    "Twenty years ago 16% of children were out of school.",
]

MAX_SHOWN = 5


class FactCycler:
    """Cycles through facts; the shown list is cleared once it grows past MAX_SHOWN."""

    def __init__(self, facts: Sequence[str] = FACTS, max_shown: int = MAX_SHOWN) -> None:
        if not facts:
            raise ValueError("FactCycler needs at least one fact")
        self._facts = list(facts)
        self._max_shown = max_shown
        self._index = 0
        self._clicks = 0
        self.shown: List[str] = []

    def current(self) -> str:
        return self._facts[self._index]

    def next_fact(self) -> List[str]:
        self.shown.append(self.current())
        self._index = (self._index + 1) % len(self._facts)
        self._clicks += 1

        if self._clicks > self._max_shown:
            self._clicks = 0
            self.shown.clear()
        return list(self.shown)
