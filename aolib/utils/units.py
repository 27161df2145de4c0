"""Angle unit conversions."""

import numpy as np

__all__ = [
    "RADIAN_TO_ARCSEC",
    "RADIAN_TO_ARCMIN",
    "ARCSEC_TO_RADIAN",
    "ARCMIN_TO_RADIAN",
    "fwhm_to_arcsec",
]

RADIAN_TO_ARCSEC = 180.0 * 3600.0 / np.pi
RADIAN_TO_ARCMIN = 180.0 * 60.0 / np.pi
ARCSEC_TO_RADIAN = 1.0 / RADIAN_TO_ARCSEC
ARCMIN_TO_RADIAN = 1.0 / RADIAN_TO_ARCMIN


def fwhm_to_arcsec(fwhm: float, wavelength: float) -> float:
    """Convert a FWHM in spatial-frequency units to arcseconds.

    Args:
        fwhm: Full width at half maximum in 1/length (e.g. 1/m).
        wavelength: Observing wavelength in the same length unit.

    Returns:
        Angular FWHM in arcseconds.

    Example:
        ```python
        result = full_width_half_max(telescope)
        fwhm_to_arcsec(result.value, 0.55e-6)  # ~0.0146 for D=8m
        ```
    """
    return fwhm * wavelength * RADIAN_TO_ARCSEC
