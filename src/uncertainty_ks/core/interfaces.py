"""Protocol definitions for collaborators of the K-S test.

The exact null distribution of the two-sample statistic is a pluggable
collaborator: the test logic only depends on this contract, so alternative
exact providers can be substituted without touching it.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class ISmirnovDistribution(Protocol):
    """Contract for the null CDF of the two-sample K-S statistic."""

    def cdf(
        self,
        statistic: float,
        n1: int,
        n2: int,
        two_sided: bool = True,
    ) -> float:
        """Return P(D < statistic) for samples of sizes n1 and n2.

        Args:
            statistic: Observed K-S statistic in [0, 1].
            n1: Size of the first sample.
            n2: Size of the second sample.
            two_sided: Whether D is the two-sided (absolute) statistic.

        Returns:
            Probability in [0, 1].

        Raises:
            MissingExactDistributionError: If the provider cannot evaluate the
                exact distribution for these sizes.
        """
        ...
