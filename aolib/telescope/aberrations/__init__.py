"""Turbulence models that can be attached to a telescope."""

from .base import AtmosphereModel, is_atmosphere_model
from .turbulence import VonKarmanAtmosphere

__all__ = [
    "AtmosphereModel",
    "is_atmosphere_model",
    "VonKarmanAtmosphere",
]
