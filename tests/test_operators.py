"""Tests for evolutionary operators.

Tests the operator functions:
- uniform_init, normal_init: population seeding
- uniform_crossover: complementary element-wise crossover
- reproduce: writing children of elite pairs into dropout slots
- mutate: sparse additive perturbation
"""

import numpy as np
import pytest

from cne_optim import PopulationInvariantError, rank_partition
from cne_optim.operators import mutate, normal_init, reproduce, uniform_crossover, uniform_init

# =============================================================================
# Initialization
# =============================================================================


class TestUniformInit:
    """Tests for the uniform seeding strategy."""

    def test_returns_requested_shape(self, rng: np.random.Generator) -> None:
        init = uniform_init(scale=0.1)

        extra = init(np.zeros((3, 2)), 7, rng)

        assert extra.shape == (7, 3, 2)

    def test_noise_within_scale(self, rng: np.random.Generator) -> None:
        iterate = np.full((4, 4), 5.0)
        init = uniform_init(scale=0.3)

        extra = init(iterate, 50, rng)

        assert np.all(np.abs(extra - iterate) <= 0.3)

    def test_candidates_differ(self, rng: np.random.Generator) -> None:
        """Each seeded candidate gets independent noise."""
        extra = uniform_init(scale=1.0)(np.zeros((5, 1)), 10, rng)

        assert len({row.tobytes() for row in extra}) == 10

    def test_does_not_modify_iterate(self, rng: np.random.Generator) -> None:
        iterate = np.ones((2, 2))

        uniform_init(scale=1.0)(iterate, 5, rng)

        np.testing.assert_array_equal(iterate, np.ones((2, 2)))

    def test_zero_scale_copies_iterate(self, rng: np.random.Generator) -> None:
        iterate = np.arange(4.0).reshape(2, 2)

        extra = uniform_init(scale=0.0)(iterate, 3, rng)

        np.testing.assert_array_equal(extra, np.stack([iterate] * 3))

    def test_preserves_dtype(self, rng: np.random.Generator) -> None:
        extra = uniform_init(scale=0.1)(np.zeros((2, 2), dtype=np.float32), 3, rng)

        assert extra.dtype == np.float32

    def test_rejects_negative_scale(self) -> None:
        with pytest.raises(ValueError, match="scale must be non-negative"):
            uniform_init(scale=-0.1)


class TestNormalInit:
    """Tests for the Gaussian seeding strategy."""

    def test_returns_requested_shape(self, rng: np.random.Generator) -> None:
        extra = normal_init(scale=0.1)(np.zeros((3, 2)), 7, rng)

        assert extra.shape == (7, 3, 2)

    def test_spread_matches_scale(self, rng: np.random.Generator) -> None:
        extra = normal_init(scale=0.5)(np.zeros((10, 10)), 200, rng)

        assert abs(float(np.std(extra)) - 0.5) < 0.02
        assert abs(float(np.mean(extra))) < 0.02

    def test_rejects_negative_scale(self) -> None:
        with pytest.raises(ValueError, match="scale must be non-negative"):
            normal_init(scale=-1.0)


# =============================================================================
# Crossover
# =============================================================================


class TestUniformCrossover:
    """Tests for uniform_crossover."""

    def test_children_inherit_from_parents(self) -> None:
        """Every child element equals mom's or dad's element at the same position."""
        mom = np.array([[1.0, 2.0], [3.0, 4.0]])
        dad = np.array([[5.0, 6.0], [7.0, 8.0]])

        child1, child2 = uniform_crossover(mom, dad, np.random.default_rng(7))

        for child in (child1, child2):
            assert np.all((child == mom) | (child == dad))

    def test_children_are_complementary(self) -> None:
        """Where one child inherits from mom, the other inherits from dad."""
        mom = np.array([[1.0, 2.0], [3.0, 4.0]])
        dad = np.array([[5.0, 6.0], [7.0, 8.0]])

        child1, child2 = uniform_crossover(mom, dad, np.random.default_rng(7))

        np.testing.assert_array_equal(child1 + child2, mom + dad)
        np.testing.assert_array_equal(child1 == mom, child2 == dad)

    def test_parents_unmodified(self) -> None:
        mom = np.array([[1.0, 2.0], [3.0, 4.0]])
        dad = np.array([[5.0, 6.0], [7.0, 8.0]])
        mom_before, dad_before = mom.copy(), dad.copy()

        uniform_crossover(mom, dad, np.random.default_rng(7))

        np.testing.assert_array_equal(mom, mom_before)
        np.testing.assert_array_equal(dad, dad_before)

    def test_deterministic_with_same_seed(self) -> None:
        mom = np.zeros((2, 2))
        dad = np.ones((2, 2))

        first = uniform_crossover(mom, dad, np.random.default_rng(123))
        second = uniform_crossover(mom, dad, np.random.default_rng(123))

        np.testing.assert_array_equal(first[0], second[0])
        np.testing.assert_array_equal(first[1], second[1])

    def test_mixes_both_parents(self, rng: np.random.Generator) -> None:
        """On a large matrix both parents contribute to each child."""
        mom = np.zeros((20, 20))
        dad = np.ones((20, 20))

        child1, _ = uniform_crossover(mom, dad, rng)

        assert 0.4 < child1.mean() < 0.6

    def test_rejects_shape_mismatch(self, rng: np.random.Generator) -> None:
        with pytest.raises(ValueError, match="parents must have the same shape"):
            uniform_crossover(np.zeros((2, 2)), np.zeros((2, 3)), rng)


class TestReproduce:
    """Tests for reproduce()."""

    def test_children_written_to_worst_dropouts(
        self, ranked_candidates: np.ndarray, rng: np.random.Generator
    ) -> None:
        """Pairs (0,1) and (2,3) overwrite slots 7,6 and 5,4."""
        partition = rank_partition(np.arange(8.0), 4)

        targets = reproduce(ranked_candidates, partition, rng)

        np.testing.assert_array_equal(targets, [7, 6, 5, 4])
        assert set(np.unique(ranked_candidates[[7, 6]])) <= {0.0, 1.0}
        assert set(np.unique(ranked_candidates[[5, 4]])) <= {2.0, 3.0}

    def test_elites_never_overwritten(self, ranked_candidates: np.ndarray, rng: np.random.Generator) -> None:
        partition = rank_partition(np.arange(8.0), 4)
        elites_before = ranked_candidates[:4].copy()

        reproduce(ranked_candidates, partition, rng)

        np.testing.assert_array_equal(ranked_candidates[:4], elites_before)

    def test_pairs_follow_rank_not_index(self, ranked_candidates: np.ndarray, rng: np.random.Generator) -> None:
        """With reversed fitness, candidates 7 and 6 are the first pair and slot 0 is the worst."""
        partition = rank_partition(np.arange(8.0)[::-1].copy(), 2)

        targets = reproduce(ranked_candidates, partition, rng)

        np.testing.assert_array_equal(targets, [0, 1])
        assert set(np.unique(ranked_candidates[[0, 1]])) <= {6.0, 7.0}
        np.testing.assert_array_equal(ranked_candidates[2:6], np.stack([np.full((2, 2), float(i)) for i in range(2, 6)]))

    def test_odd_elite_does_not_reproduce(self, ranked_candidates: np.ndarray, rng: np.random.Generator) -> None:
        """A third elite without a partner is kept and only one pair reproduces."""
        partition = rank_partition(np.arange(8.0), 3)
        before = ranked_candidates.copy()

        targets = reproduce(ranked_candidates, partition, rng)

        np.testing.assert_array_equal(targets, [7, 6])
        np.testing.assert_array_equal(ranked_candidates[:6], before[:6])

    def test_children_are_complementary(self, ranked_candidates: np.ndarray, rng: np.random.Generator) -> None:
        partition = rank_partition(np.arange(8.0), 2)

        reproduce(ranked_candidates, partition, rng)

        np.testing.assert_array_equal(ranked_candidates[7] + ranked_candidates[6], np.full((2, 2), 1.0))

    def test_population_size_unchanged(self, ranked_candidates: np.ndarray, rng: np.random.Generator) -> None:
        reproduce(ranked_candidates, rank_partition(np.arange(8.0), 4), rng)

        assert ranked_candidates.shape == (8, 2, 2)

    def test_rejects_insufficient_dropouts(self, rng: np.random.Generator) -> None:
        candidates = np.zeros((4, 2))
        partition = rank_partition(np.arange(4.0), 4)

        with pytest.raises(PopulationInvariantError, match="need 4 dropout slots, only 0 available"):
            reproduce(candidates, partition, rng)


# =============================================================================
# Mutation
# =============================================================================


class TestMutate:
    """Tests for mutate()."""

    def test_full_probability_bound(self, rng: np.random.Generator) -> None:
        """With probability 1 every element changes by at most mutation_size."""
        candidates = rng.standard_normal((10, 3, 4))
        before = candidates.copy()

        mask = mutate(candidates, 1.0, 0.05, rng)

        assert mask.all()
        delta = np.abs(candidates - before)
        assert np.all(delta >= 0.0)
        assert np.all(delta <= 0.05 + 1e-12)

    def test_both_signs_used(self, rng: np.random.Generator) -> None:
        candidates = np.zeros((20, 20))

        mutate(candidates, 1.0, 0.1, rng)

        assert np.any(candidates > 0)
        assert np.any(candidates < 0)

    def test_zero_probability_is_noop(self, rng: np.random.Generator) -> None:
        candidates = rng.standard_normal((5, 2, 2))
        before = candidates.copy()

        mask = mutate(candidates, 0.0, 1.0, rng)

        assert not mask.any()
        np.testing.assert_array_equal(candidates, before)

    def test_only_masked_elements_change(self, rng: np.random.Generator) -> None:
        candidates = np.zeros((10, 10))

        mask = mutate(candidates, 0.3, 0.5, rng)

        assert np.all(candidates[~mask] == 0.0)

    def test_mutation_rate(self, rng: np.random.Generator) -> None:
        """The fraction of mutated elements is close to mutation_prob."""
        candidates = np.zeros((100, 100))

        mask = mutate(candidates, 0.25, 0.1, rng)

        assert abs(float(mask.mean()) - 0.25) < 0.02

    def test_zero_size_keeps_values(self, rng: np.random.Generator) -> None:
        candidates = np.ones((4, 2))

        mutate(candidates, 1.0, 0.0, rng)

        np.testing.assert_array_equal(candidates, np.ones((4, 2)))

    def test_preserves_float32_dtype(self, rng: np.random.Generator) -> None:
        candidates = np.zeros((4, 2), dtype=np.float32)

        mutate(candidates, 1.0, 0.1, rng)

        assert candidates.dtype == np.float32
