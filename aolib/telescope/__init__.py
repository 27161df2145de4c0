"""Telescope optical response: pupil, OTF, PSF and FWHM.

Example:
    >>> import numpy as np
    >>> from aolib.telescope import TelescopeConfig, compute_psf, full_width_half_max
    >>>
    >>> tel = TelescopeConfig(diameter=8.0, obstruction_ratio=0.14, resolution=64)
    >>> pupil = tel.get_pupil()
    >>> psf = compute_psf(tel, np.linspace(0, 1, 101))
    >>> fwhm = full_width_half_max(tel).value  # in 1/m
"""

# Core data structures
from .config import TelescopeConfig, IntegrationSettings

# Pupil
from .pupil import piston, make_pupil

# Aperture correlation
from .correlation import auto_correlation, cross_correlation

# OTF / PSF
from .otf import compute_otf, diffraction_otf
from .psf import compute_psf, airy_psf, hankel_psf

# Resolution
from .fwhm import full_width_half_max, FWHMResult

# Turbulence
from .aberrations import AtmosphereModel, VonKarmanAtmosphere

__all__ = [
    # Core data structures
    "TelescopeConfig",
    "IntegrationSettings",
    # Pupil
    "piston",
    "make_pupil",
    # Aperture correlation
    "auto_correlation",
    "cross_correlation",
    # OTF / PSF
    "compute_otf",
    "diffraction_otf",
    "compute_psf",
    "airy_psf",
    "hankel_psf",
    # Resolution
    "full_width_half_max",
    "FWHMResult",
    # Turbulence
    "AtmosphereModel",
    "VonKarmanAtmosphere",
]
