"""aolib - Telescope optical response for adaptive-optics simulation.

Computes the pupil mask, optical transfer function (OTF), point spread
function (PSF) and FWHM of a circular telescope aperture with optional
central obstruction, optionally degraded by a long-exposure turbulence
model.

The library is organized into two modules:

- **telescope**: Aperture configuration, pupil, OTF/PSF and FWHM
- **utils**: Angle unit conversions

Example:
    >>> import numpy as np
    >>> from aolib import TelescopeConfig, VonKarmanAtmosphere
    >>> from aolib import compute_otf, compute_psf, full_width_half_max
    >>>
    >>> # 8m telescope with a 14% central obstruction
    >>> tel = TelescopeConfig(diameter=8.0, obstruction_ratio=0.14)
    >>> compute_psf(tel, 0.0)  # collecting area
    >>>
    >>> # Seeing-limited: attach a turbulence model
    >>> atm = VonKarmanAtmosphere(r0=0.15, L0=30.0)
    >>> seeing = TelescopeConfig(diameter=8.0, aberration=atm)
    >>> result = full_width_half_max(seeing)
    >>> fwhm_to_arcsec(result.value, 0.5e-6)
"""

__version__ = "0.1.0"

# =============================================================================
# Telescope Module - Configuration, pupil, OTF/PSF, FWHM
# =============================================================================
from .telescope import (
    # Core data structures
    TelescopeConfig,
    IntegrationSettings,
    # Pupil
    piston,
    make_pupil,
    # Aperture correlation
    auto_correlation,
    cross_correlation,
    # OTF / PSF
    compute_otf,
    diffraction_otf,
    compute_psf,
    airy_psf,
    hankel_psf,
    # Resolution
    full_width_half_max,
    FWHMResult,
    # Turbulence
    AtmosphereModel,
    VonKarmanAtmosphere,
)

# =============================================================================
# Errors and utilities
# =============================================================================
from .errors import ConfigurationError, IntegrationError
from .utils import (
    RADIAN_TO_ARCSEC,
    RADIAN_TO_ARCMIN,
    ARCSEC_TO_RADIAN,
    ARCMIN_TO_RADIAN,
    fwhm_to_arcsec,
)

__all__ = [
    # Version
    "__version__",
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
    # Errors
    "ConfigurationError",
    "IntegrationError",
    # Units
    "RADIAN_TO_ARCSEC",
    "RADIAN_TO_ARCMIN",
    "ARCSEC_TO_RADIAN",
    "ARCMIN_TO_RADIAN",
    "fwhm_to_arcsec",
]
