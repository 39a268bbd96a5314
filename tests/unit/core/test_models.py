"""Unit tests for the domain value objects."""

import math

import pytest

from uncertainty_ks.core.models import FilterResult, FilterStatus, Sample, TestResult


class TestSample:
    """Tests for Sample ingest and helpers."""

    def test_two_sigma_ingest_halves_uncertainties(self) -> None:
        """Two-sigma inputs become one-sigma uncertainties."""
        sample = Sample.from_two_sigma([1.0, 2.0], [0.4, 0.2])
        assert sample.sigmas == (0.2, 0.1)

    def test_ingest_sorts_by_value(self) -> None:
        """Observations are sorted ascending, uncertainties follow their values."""
        sample = Sample.from_one_sigma([3.0, 1.0, 2.0], [0.3, 0.1, 0.2])
        assert sample.values == (1.0, 2.0, 3.0)
        assert sample.sigmas == (0.1, 0.2, 0.3)

    def test_missing_entries_dropped_pairwise(self) -> None:
        """A missing value or uncertainty drops the whole observation."""
        sample = Sample.from_two_sigma([1.0, None, 3.0, 4.0], [0.2, 0.2, math.nan, 0.2])
        assert sample.values == (1.0, 4.0)
        assert sample.size == 2

    def test_length_mismatch_raises(self) -> None:
        """Unequal vectors must raise ValueError."""
        with pytest.raises(ValueError, match="2 values but 3 uncertainties"):
            Sample.from_two_sigma([1.0, 2.0], [0.1, 0.1, 0.1], name="x")

    def test_non_positive_uncertainty_raises(self) -> None:
        """A zero uncertainty must raise ValueError."""
        with pytest.raises(ValueError, match="strictly positive"):
            Sample.from_two_sigma([1.0, 2.0], [0.1, 0.0])

    def test_infinite_value_raises(self) -> None:
        """Infinite values are malformed rather than missing."""
        with pytest.raises(ValueError, match="infinite"):
            Sample.from_two_sigma([1.0, math.inf], [0.1, 0.1])

    def test_has_duplicates(self) -> None:
        """has_duplicates() detects exact repeats only."""
        assert Sample.from_one_sigma([1.0, 2.0, 1.0], [0.1] * 3).has_duplicates()
        assert not Sample.from_one_sigma([1.0, 2.0, 1.0000001], [0.1] * 3).has_duplicates()

    def test_head_keeps_youngest(self) -> None:
        """head() returns the first observations in value order."""
        sample = Sample.from_one_sigma([5.0, 1.0, 3.0], [0.5, 0.1, 0.3], name="z")
        assert sample.head(2) == Sample(values=(1.0, 3.0), sigmas=(0.1, 0.3), name="z")


class TestTestResult:
    """Tests for TestResult derived fields and serialisation."""

    def make_filter(self, xenocrysts: tuple[float, ...]) -> FilterResult:
        retained = Sample.from_one_sigma([1.0, 2.0], [0.1, 0.1], name="x")
        status = FilterStatus.XENOCRYSTS_FOUND if xenocrysts else FilterStatus.NONE_FOUND
        return FilterResult(status=status, xenocrysts=xenocrysts, retained=retained, threshold=2.0)

    def test_unfiltered_result(self) -> None:
        """Without filtering, xenocryst lists are None."""
        result = TestResult(statistic=0.4, p_value=0.3, winners=(1.0,), n_x=8, n_y=9)
        assert result.n == 17
        assert not result.filtered
        payload = result.to_dict()
        assert payload["xenocrysts_x"] is None
        assert payload["alternative"] == "two-sided"
        assert "series" not in payload

    def test_filtered_result_exposes_xenocrysts(self) -> None:
        """Filter outcomes surface as xenocryst lists in the result."""
        result = TestResult(
            statistic=0.4,
            p_value=0.3,
            winners=(1.0,),
            n_x=7,
            n_y=8,
            filter_x=self.make_filter((9.0,)),
            filter_y=self.make_filter(()),
        )
        assert result.filtered
        assert result.xenocrysts_x == (9.0,)
        assert result.xenocrysts_y == ()
        assert result.to_dict()["xenocrysts_x"] == [9.0]
