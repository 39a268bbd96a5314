"""Unit tests for the slope-based xenocryst filter.

Samples use tiny uncertainties so the density-mode curve is close to a step
function and each slope is roughly 1 / gap, which keeps expected cuts easy
to verify by hand.
"""

import pytest

from uncertainty_ks.adapters.statistical_tests.xenocryst_filter import (
    DEFAULT_THRESHOLD,
    XenocrystFilter,
    filter_xenocrysts,
)
from uncertainty_ks.core.errors import (
    DuplicateValuesError,
    ErrorCode,
    InsufficientSampleSizeError,
)
from uncertainty_ks.core.models import FilterStatus, Sample

MAIN_POPULATION = [100.0, 100.1, 100.2, 100.3, 100.4, 100.5, 100.6]

# Worked example: two-sigma uncertainty is 1.5% of each value
WORKED_X = [90.301, 89.891, 89.84, 89.753, 89.74, 89.72, 89.64, 89.04, 89.003, 88.78]
WORKED_Y = [90.115, 88.515, 88.481, 88.482, 88.478, 88.427, 88.343]


def make_sample(values: list[float], two_sigma: float = 0.02, name: str = "x") -> Sample:
    """Build a sample with a constant two-sigma uncertainty."""
    return Sample.from_two_sigma(values, [two_sigma] * len(values), name=name)


def percent_uncertainties(values: list[float], percent: float = 1.5) -> list[float]:
    """Two-sigma uncertainties proportional to each value."""
    return [v * percent / 100.0 for v in values]


class TestXenocrystFilterPreconditions:
    """Tests for the filter's fatal input checks."""

    @pytest.mark.parametrize("size", [1, 3, 6])
    def test_small_sample_raises_insufficient_size(self, size: int) -> None:
        """Samples of six or fewer observations must be rejected."""
        sample = make_sample(MAIN_POPULATION[:size], name="y")
        with pytest.raises(InsufficientSampleSizeError) as exc_info:
            XenocrystFilter().run(sample)
        assert exc_info.value.sample == "y"
        assert exc_info.value.error_code is ErrorCode.INSUFFICIENT_SAMPLE_SIZE

    def test_seven_observations_are_accepted(self) -> None:
        """Seven observations is the smallest sample the filter scans."""
        result = XenocrystFilter().run(make_sample(MAIN_POPULATION))
        assert result.status is FilterStatus.NONE_FOUND

    def test_duplicate_values_raise(self) -> None:
        """Any repeated value must be rejected."""
        sample = make_sample(MAIN_POPULATION + [100.3])
        with pytest.raises(DuplicateValuesError) as exc_info:
            XenocrystFilter().run(sample)
        assert exc_info.value.sample == "x"

    def test_size_check_precedes_duplicate_check(self) -> None:
        """A small sample with duplicates reports the size problem."""
        with pytest.raises(InsufficientSampleSizeError):
            XenocrystFilter().run(make_sample([1.0, 1.0, 2.0]))

    def test_invalid_configuration_raises(self) -> None:
        """Non-positive threshold or sigma scale must raise ValueError."""
        with pytest.raises(ValueError, match="threshold"):
            XenocrystFilter(threshold=0.0)
        with pytest.raises(ValueError, match="sigma_scale"):
            XenocrystFilter(sigma_scale=-1.0)


class TestXenocrystFilterScan:
    """Tests for the forward slope scan and its cut."""

    def test_isolated_old_value_is_removed(self) -> None:
        """A date 4.4 units older than its neighbour is a xenocryst."""
        result = XenocrystFilter().run(make_sample(MAIN_POPULATION + [105.0]))
        assert result.status is FilterStatus.XENOCRYSTS_FOUND
        assert result.found
        assert result.xenocrysts == (105.0,)
        assert result.retained.values == tuple(MAIN_POPULATION)
        assert result.cut_slope is not None and result.cut_slope <= DEFAULT_THRESHOLD

    def test_first_gap_discards_entire_older_tail(self) -> None:
        """Everything older than the first qualifying gap goes, even close pairs."""
        values = MAIN_POPULATION + [102.0, 102.05, 110.0]
        result = XenocrystFilter().run(make_sample(values))
        assert result.xenocrysts == (102.0, 102.05, 110.0)
        assert result.retained.size == len(MAIN_POPULATION)

    def test_no_gap_reports_none_found(self) -> None:
        """A tightly spaced sample is returned intact."""
        sample = make_sample(MAIN_POPULATION + [100.7, 100.8])
        result = XenocrystFilter().run(sample)
        assert result.status is FilterStatus.NONE_FOUND
        assert not result.found
        assert result.xenocrysts == ()
        assert result.retained == sample
        assert result.cut_slope is None

    def test_unsorted_input_is_scanned_in_age_order(self) -> None:
        """Input order does not change which dates are cut."""
        shuffled = [105.0, 100.3, 100.0, 100.6, 100.1, 100.5, 100.2, 100.4]
        result = XenocrystFilter().run(make_sample(shuffled))
        assert result.xenocrysts == (105.0,)

    def test_hand_built_unsorted_sample_retains_aligned_youngest(self) -> None:
        """An unsorted Sample keeps each value paired with its own sigma."""
        sample = Sample(
            values=(105.0, 100.3, 100.0, 100.6, 100.1, 100.5, 100.2, 100.4),
            sigmas=(0.05, 0.013, 0.010, 0.016, 0.011, 0.015, 0.012, 0.014),
            name="z",
        )
        result = XenocrystFilter().run(sample)
        assert result.xenocrysts == (105.0,)
        assert result.retained == Sample(
            values=(100.0, 100.1, 100.2, 100.3, 100.4, 100.5, 100.6),
            sigmas=(0.010, 0.011, 0.012, 0.013, 0.014, 0.015, 0.016),
            name="z",
        )

    def test_retained_keeps_one_sigma_uncertainties(self) -> None:
        """Retained observations carry the ingested one-sigma uncertainties."""
        result = XenocrystFilter().run(make_sample(MAIN_POPULATION + [105.0], two_sigma=0.04))
        assert result.retained.sigmas == tuple([0.02] * len(MAIN_POPULATION))

    def test_per_call_threshold_overrides_configured_threshold(self) -> None:
        """A lower threshold tolerates the 4.4-unit gap."""
        sample = make_sample(MAIN_POPULATION + [105.0])
        result = XenocrystFilter().run(sample, threshold=0.1)
        assert result.status is FilterStatus.NONE_FOUND
        assert result.threshold == 0.1

    def test_probability_mode_reading_cuts_earlier(self) -> None:
        """On the normalised curve the same threshold cuts at the first gap."""
        sample = make_sample(MAIN_POPULATION + [105.0])
        result = XenocrystFilter(normalize=True).run(sample)
        assert result.xenocrysts[0] == 100.1
        assert result.retained.values == (100.0,)

    def test_refiltering_retained_data_finds_nothing_more(self) -> None:
        """Running the filter on its own output is stable."""
        xenocryst_filter = XenocrystFilter()
        first = xenocryst_filter.run(make_sample(MAIN_POPULATION + [105.0]))
        second = xenocryst_filter.run(first.retained)
        assert second.status is FilterStatus.NONE_FOUND
        assert second.retained == first.retained

    def test_repeated_runs_are_identical(self) -> None:
        """Identical inputs give identical results."""
        sample = make_sample(MAIN_POPULATION + [102.0, 110.0])
        assert XenocrystFilter().run(sample) == XenocrystFilter().run(sample)

    def test_to_dict_contains_required_keys(self) -> None:
        """to_dict() must expose the filter outcome for storage."""
        result = XenocrystFilter().run(make_sample(MAIN_POPULATION + [105.0]))
        payload = result.to_dict()
        assert payload["status"] == "xenocrysts_found"
        assert payload["xenocrysts"] == [105.0]
        assert payload["sample"] == "x"


class TestWorkedExample:
    """The published comparison of two zircon populations."""

    def test_second_sample_loses_its_isolated_oldest_date(self) -> None:
        """90.115 sits 1.6 units above 88.515 and is cut."""
        result = filter_xenocrysts(WORKED_Y, percent_uncertainties(WORKED_Y), name="y")
        assert result.xenocrysts == (90.115,)
        assert result.retained.size == 6

    def test_first_sample_has_no_qualifying_gap(self) -> None:
        """With 1.5% uncertainties the first sample's gaps are all bridged."""
        result = filter_xenocrysts(WORKED_X, percent_uncertainties(WORKED_X), name="x")
        assert result.status is FilterStatus.NONE_FOUND
        assert result.retained.size == 10

    def test_one_sigma_reading_smooths_more(self) -> None:
        """Without the extra halving the mixture is wider and nothing is cut in x."""
        result = filter_xenocrysts(
            WORKED_X, percent_uncertainties(WORKED_X), sigma_scale=1.0, name="x"
        )
        assert result.status is FilterStatus.NONE_FOUND
