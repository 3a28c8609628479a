"""Tests für die Kombinations-Aufzählung (solver/enumerator.py)."""

import random
from math import comb

import pytest

from config.schema import EnumerationConfig
from models.errors import CombinationLimitError
from solver.enumerator import CombinationEnumerator, EnumerationStrategy


# ─── STRATEGIEWAHL ────────────────────────────────────────────────────────────

class TestStrategy:
    def test_target_count_means_exact(self):
        assert CombinationEnumerator(30, target_count=3).strategy == EnumerationStrategy.EXACT

    def test_small_catalog_powerset(self):
        assert CombinationEnumerator(19).strategy == EnumerationStrategy.POWERSET

    def test_threshold_switches_to_sampled(self):
        """Ab 20 Kursen (Default-Schwelle) wird per Zufallsauswahl gesucht."""
        assert CombinationEnumerator(20).strategy == EnumerationStrategy.SAMPLED

    def test_threshold_configurable(self):
        cfg = EnumerationConfig(large_catalog_threshold=5)
        assert CombinationEnumerator(5, config=cfg).strategy == EnumerationStrategy.SAMPLED
        assert CombinationEnumerator(4, config=cfg).strategy == EnumerationStrategy.POWERSET

    def test_negative_n_raises(self):
        with pytest.raises(ValueError):
            CombinationEnumerator(-1)


# ─── EXACT ────────────────────────────────────────────────────────────────────

class TestExact:
    def test_all_k_subsets_lexicographic(self):
        combos = list(CombinationEnumerator(5, target_count=3))
        assert len(combos) == comb(5, 3)
        assert combos[0] == (0, 1, 2)
        assert combos[-1] == (2, 3, 4)
        assert all(len(c) == 3 for c in combos)

    def test_k_larger_than_n_yields_nothing(self):
        enum = CombinationEnumerator(5, target_count=6)
        assert enum.candidate_count() == 0
        assert list(enum) == []

    def test_k_equals_one(self):
        assert list(CombinationEnumerator(3, target_count=1)) == [(0,), (1,), (2,)]


# ─── POWERSET ─────────────────────────────────────────────────────────────────

class TestPowerset:
    def test_bitmask_order(self):
        combos = list(CombinationEnumerator(3))
        assert combos == [(0,), (1,), (0, 1), (2,), (0, 2), (1, 2), (0, 1, 2)]

    def test_count_all_nonempty_subsets(self):
        enum = CombinationEnumerator(6)
        combos = list(enum)
        assert len(combos) == 2 ** 6 - 1 == enum.candidate_count()
        assert len(set(combos)) == len(combos)

    def test_empty_catalog(self):
        enum = CombinationEnumerator(0)
        assert enum.candidate_count() == 0
        assert list(enum) == []


# ─── SAMPLED ──────────────────────────────────────────────────────────────────

class TestSampled:
    def test_sizes_and_bounds(self):
        """Größen 2..8, höchstens 100 Ziehungen je Größe, sortierte Indizes."""
        enum = CombinationEnumerator(25, rng=random.Random(3))
        assert list(enum.sample_sizes()) == list(range(2, 9))
        assert enum.candidate_count() == 7 * 100

        combos = list(enum)
        assert len(combos) <= 700
        sizes = {len(c) for c in combos}
        assert sizes == set(range(2, 9))
        for c in combos:
            assert list(c) == sorted(c)
            assert len(set(c)) == len(c)
            assert all(0 <= i < 25 for i in c)

    def test_no_duplicate_draws(self):
        combos = list(CombinationEnumerator(20, rng=random.Random(11)))
        assert len(set(combos)) == len(combos)

    def test_per_size_cap_by_binomial(self):
        """Bei kleiner Schwelle begrenzt C(n, size) die Anzahl Ziehungen."""
        cfg = EnumerationConfig(large_catalog_threshold=4, max_sample_size=8)
        enum = CombinationEnumerator(4, config=cfg, rng=random.Random(0))
        assert list(enum.sample_sizes()) == [2, 3, 4]
        assert enum.candidate_count() == comb(4, 2) + comb(4, 3) + comb(4, 4)
        assert len([c for c in enum if len(c) == 4]) == 1

    def test_seed_reproducible(self):
        a = list(CombinationEnumerator(22, rng=random.Random(42)))
        b = list(CombinationEnumerator(22, rng=random.Random(42)))
        assert a == b


# ─── OBERGRENZE ───────────────────────────────────────────────────────────────

class TestCombinationLimit:
    def test_powerset_over_limit_raises_before_enumeration(self):
        cfg = EnumerationConfig(max_exhaustive_combinations=100)
        enum = CombinationEnumerator(10, config=cfg)
        with pytest.raises(CombinationLimitError) as exc:
            iter(enum)
        assert exc.value.candidate_count == 1023
        assert exc.value.limit == 100

    def test_exact_over_limit_raises(self):
        cfg = EnumerationConfig(max_exhaustive_combinations=50)
        with pytest.raises(CombinationLimitError):
            list(CombinationEnumerator(10, target_count=5, config=cfg))

    def test_sampled_ignores_limit(self):
        cfg = EnumerationConfig(max_exhaustive_combinations=10)
        combos = list(CombinationEnumerator(25, config=cfg, rng=random.Random(1)))
        assert len(combos) > 10

    def test_default_limit_allows_19_courses(self):
        """2^19 − 1 Kandidaten liegen unter der Default-Obergrenze."""
        enum = CombinationEnumerator(19)
        assert enum.candidate_count() < enum.config.max_exhaustive_combinations
