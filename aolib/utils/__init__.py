"""Shared utilities."""

from .units import (
    RADIAN_TO_ARCSEC,
    RADIAN_TO_ARCMIN,
    ARCSEC_TO_RADIAN,
    ARCMIN_TO_RADIAN,
    fwhm_to_arcsec,
)

__all__ = [
    "RADIAN_TO_ARCSEC",
    "RADIAN_TO_ARCMIN",
    "ARCSEC_TO_RADIAN",
    "ARCMIN_TO_RADIAN",
    "fwhm_to_arcsec",
]
