"""Tests for check_termination priority and each stopping condition."""

from cne_optim import CNEConfig, TerminationStatus, check_termination


class TestTolerance:
    def test_reached(self) -> None:
        config = CNEConfig(tolerance=0.01, max_generations=10)

        assert check_termination(config, 1, 0.0) is TerminationStatus.CONVERGED_BY_TOLERANCE

    def test_equal_counts_as_reached(self) -> None:
        config = CNEConfig(tolerance=0.5, max_generations=10)

        assert check_termination(config, 3, 0.5) is TerminationStatus.CONVERGED_BY_TOLERANCE

    def test_not_reached(self) -> None:
        config = CNEConfig(tolerance=0.01, max_generations=10)

        assert check_termination(config, 1, 0.02) is TerminationStatus.RUNNING

    def test_negative_disables(self) -> None:
        config = CNEConfig(tolerance=-1.0, max_generations=10)

        assert check_termination(config, 1, -5.0) is TerminationStatus.RUNNING

    def test_takes_priority_over_generation_budget(self) -> None:
        config = CNEConfig(tolerance=0.01, max_generations=1)

        assert check_termination(config, 1, 0.0) is TerminationStatus.CONVERGED_BY_TOLERANCE


class TestGenerationBudget:
    def test_reached(self) -> None:
        config = CNEConfig(tolerance=-1.0, max_generations=10)

        assert check_termination(config, 10, 3.0) is TerminationStatus.MAX_GENERATIONS_REACHED

    def test_not_reached(self) -> None:
        config = CNEConfig(tolerance=-1.0, max_generations=10)

        assert check_termination(config, 9, 3.0) is TerminationStatus.RUNNING

    def test_takes_priority_over_min_improvement(self) -> None:
        config = CNEConfig(tolerance=-1.0, max_generations=2, min_improvement=1.0)

        status = check_termination(config, 2, 3.0, previous_best=3.0)

        assert status is TerminationStatus.MAX_GENERATIONS_REACHED


class TestMinImprovement:
    def test_disabled_by_default(self) -> None:
        config = CNEConfig(tolerance=-1.0, max_generations=10)

        assert check_termination(config, 2, 3.0, previous_best=3.0) is TerminationStatus.RUNNING

    def test_stalled(self) -> None:
        config = CNEConfig(tolerance=-1.0, max_generations=10, min_improvement=0.1)

        status = check_termination(config, 2, 2.95, previous_best=3.0)

        assert status is TerminationStatus.MIN_IMPROVEMENT_REACHED

    def test_improving(self) -> None:
        config = CNEConfig(tolerance=-1.0, max_generations=10, min_improvement=0.1)

        assert check_termination(config, 2, 2.5, previous_best=3.0) is TerminationStatus.RUNNING

    def test_never_on_first_generation(self) -> None:
        config = CNEConfig(tolerance=-1.0, max_generations=10, min_improvement=0.1)

        assert check_termination(config, 1, 3.0) is TerminationStatus.RUNNING


def test_status_values_are_strings() -> None:
    assert TerminationStatus.CONVERGED_BY_TOLERANCE == "converged_by_tolerance"
    assert TerminationStatus("max_generations_reached") is TerminationStatus.MAX_GENERATIONS_REACHED
