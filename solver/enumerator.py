"""Aufzählung der Kandidaten-Kombinationen eines Kurskatalogs.

Drei Strategien:
  - EXACT:    alle Teilmengen mit genau k Kursen (lexikographisch)
  - POWERSET: alle nichtleeren Teilmengen per Bitmaske 1 .. 2^n−1
  - SAMPLED:  geschichtete Zufallsauswahlen für große Kataloge

Kombinationen werden als sortierte Index-Tupel in den Katalog geliefert.
"""

import itertools
import logging
import random
from enum import Enum
from math import comb
from typing import Iterator, Optional

from config.schema import EnumerationConfig
from models.errors import CombinationLimitError

logger = logging.getLogger(__name__)


class EnumerationStrategy(str, Enum):
    EXACT = "exact"
    POWERSET = "powerset"
    SAMPLED = "sampled"


class CombinationEnumerator:
    """Erzeugt Index-Kombinationen für n Kurse.

    Verwendung:
        enum = CombinationEnumerator(n=12, target_count=4)
        for combo in enum:
            ...

    Im SAMPLED-Modus wird nur rng benutzt; für reproduzierbare Zufallsauswahlen
    ein geseedetes random.Random übergeben.
    """

    def __init__(
        self,
        n: int,
        target_count: Optional[int] = None,
        config: Optional[EnumerationConfig] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        if n < 0:
            raise ValueError(f"Kursanzahl muss ≥ 0 sein, ist {n}")
        self.n = n
        self.target_count = target_count
        self.config = config or EnumerationConfig()
        self.rng = rng or random.Random()

    @property
    def strategy(self) -> EnumerationStrategy:
        if self.target_count is not None:
            return EnumerationStrategy.EXACT
        if self.n < self.config.large_catalog_threshold:
            return EnumerationStrategy.POWERSET
        return EnumerationStrategy.SAMPLED

    def sample_sizes(self) -> range:
        """Kombinationsgrößen im SAMPLED-Modus: 2 .. min(max_sample_size, n)."""
        return range(2, min(self.config.max_sample_size, self.n) + 1)

    def candidate_count(self) -> int:
        """Anzahl zu prüfender Kandidaten (im SAMPLED-Modus Obergrenze)."""
        strategy = self.strategy
        if strategy == EnumerationStrategy.EXACT:
            if self.target_count > self.n:
                return 0
            return comb(self.n, self.target_count)
        if strategy == EnumerationStrategy.POWERSET:
            return (1 << self.n) - 1 if self.n > 0 else 0
        return sum(
            min(self.config.samples_per_size, comb(self.n, size))
            for size in self.sample_sizes()
        )

    def __iter__(self) -> Iterator[tuple[int, ...]]:
        strategy = self.strategy
        if strategy != EnumerationStrategy.SAMPLED:
            count = self.candidate_count()
            limit = self.config.max_exhaustive_combinations
            if count > limit:
                raise CombinationLimitError(count, limit)

        logger.debug(f"Aufzählung: n={self.n}, Strategie={strategy.value}")
        if self.n == 0:
            return iter(())
        if strategy == EnumerationStrategy.EXACT:
            return self._exact(self.target_count)
        if strategy == EnumerationStrategy.POWERSET:
            return self._powerset()
        return self._sampled()

    # ─── Strategien ───────────────────────────────────────────────────────────

    def _exact(self, k: int) -> Iterator[tuple[int, ...]]:
        if k > self.n:
            return
        yield from itertools.combinations(range(self.n), k)

    def _powerset(self) -> Iterator[tuple[int, ...]]:
        n = self.n
        for mask in range(1, 1 << n):
            yield tuple(j for j in range(n) if mask & (1 << j))

    def _sampled(self) -> Iterator[tuple[int, ...]]:
        """Pro Größe bis zu min(samples_per_size, C(n, size)) Ziehungen.

        Innerhalb einer Ziehung ohne Zurücklegen; doppelte Ziehungen über
        mehrere Versuche werden übersprungen, zählen aber als Versuch.
        """
        indices = range(self.n)
        for size in self.sample_sizes():
            attempts = min(self.config.samples_per_size, comb(self.n, size))
            seen: set[tuple[int, ...]] = set()
            for _ in range(attempts):
                combo = tuple(sorted(self.rng.sample(indices, size)))
                if combo in seen:
                    continue
                seen.add(combo)
                yield combo
