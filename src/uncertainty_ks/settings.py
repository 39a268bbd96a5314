"""Service settings for the uncertainty-aware K-S comparison."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Configuration for the uncertainty-aware age comparison service.

    Defaults reproduce the published behaviour of the xenocryst filter and the
    modified K-S test; every value may be overridden from the environment.

    All environment variables use the UNCERTAINTY_KS_ prefix.
    """

    service_name: str = "uncertainty-ks"

    # -------------------------------------------------------------------------
    # Logging
    # -------------------------------------------------------------------------

    log_level: str = "INFO"

    # Emit JSON log lines instead of the human-readable console renderer
    json_logs: bool = False

    # -------------------------------------------------------------------------
    # Xenocryst filter
    # -------------------------------------------------------------------------

    # Slope threshold: a cut happens where the mixture CDF slope <= threshold.
    # 1/0.45 allows a gap of ~0.45 time units between consecutive ages.
    xenocryst_threshold: float = 1 / 0.45

    # Factor applied to one-sigma uncertainties inside the slope scan
    xenocryst_sigma_scale: float = 0.5

    # Samples smaller than this cannot be filtered
    xenocryst_min_sample_size: int = 7

    # Evaluate the slope on the probability-mode CDF instead of density mode
    xenocryst_normalize: bool = False

    # -------------------------------------------------------------------------
    # K-S test
    # -------------------------------------------------------------------------

    # Samples at or below this size trigger LowSampleSizeWarning
    low_sample_size_warning: int = 6

    # Significance level for the is_significant verdict in API responses
    significance_level: float = 0.05

    # -------------------------------------------------------------------------
    # Distribution series
    # -------------------------------------------------------------------------

    visualizer_points: int = 1000

    # Domain padding in multiples of the largest one-sigma uncertainty
    visualizer_sigma_span: float = 3.0

    model_config = SettingsConfigDict(env_prefix="UNCERTAINTY_KS_")
