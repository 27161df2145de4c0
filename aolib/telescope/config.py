"""Telescope configuration data structures."""

import threading
from dataclasses import dataclass, field
from typing import Any, Optional

import numpy as np

from ..errors import ConfigurationError
from ..utils.units import ARCMIN_TO_RADIAN, ARCSEC_TO_RADIAN
from .aberrations.base import is_atmosphere_model
from .pupil import make_pupil

__all__ = ["TelescopeConfig", "IntegrationSettings"]


@dataclass(frozen=True)
class TelescopeConfig:
    """Immutable telescope aperture parameters.

    Lengths can be in any unit (typically meters); spatial frequencies
    returned by the OTF/PSF functions are in the inverse of that unit.

    Attributes:
        diameter: Aperture diameter D (> 0).
        obstruction_ratio: Central obstruction diameter over D (0 <= ρ < 1).
        resolution: Pixels across the sampled pupil. Optional; without it
            no pupil mask is available.
        field_of_view_arcsec: Field of view in arcseconds.
        field_of_view_arcmin: Field of view in arcminutes. At most one of
            the two field-of-view parameters may be given.
        sampling_time: Sampling time (seconds). Stored for collaborators,
            not used by the optical response.
        aberration: Optional turbulence model exposing
            ``long_exposure_otf(r)`` and ``r0``. Held by reference.
        precompute_pupil: If True, sample the pupil at construction instead
            of on first ``get_pupil()`` call.

    Example:
        ```python
        tel = TelescopeConfig(diameter=8.0, obstruction_ratio=0.14, resolution=64)
        print(tel.area)        # ~49.28
        pupil = tel.get_pupil()
        ```
    """

    diameter: float
    obstruction_ratio: float = 0.0
    resolution: Optional[int] = None
    field_of_view_arcsec: Optional[float] = None
    field_of_view_arcmin: Optional[float] = None
    sampling_time: Optional[float] = None
    aberration: Any = None
    precompute_pupil: bool = False
    _pupil: Optional[np.ndarray] = field(
        default=None, init=False, repr=False, compare=False
    )
    _pupil_lock: Any = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Validate parameters and set up the pupil cache."""
        if not self.diameter > 0:
            raise ConfigurationError(
                f"Diameter must be positive, got {self.diameter}"
            )
        if not 0 <= self.obstruction_ratio < 1:
            raise ConfigurationError(
                f"Obstruction ratio must be in [0, 1), got {self.obstruction_ratio}"
            )
        if self.resolution is not None:
            if int(self.resolution) != self.resolution or self.resolution < 1:
                raise ConfigurationError(
                    f"Resolution must be a positive integer, got {self.resolution}"
                )
            object.__setattr__(self, "resolution", int(self.resolution))
        if (
            self.field_of_view_arcsec is not None
            and self.field_of_view_arcmin is not None
        ):
            raise ConfigurationError(
                "Specify the field of view in arcsec or arcmin, not both"
            )
        for name in ("field_of_view_arcsec", "field_of_view_arcmin"):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise ConfigurationError(f"{name} must be >= 0, got {value}")
        if self.sampling_time is not None and not self.sampling_time > 0:
            raise ConfigurationError(
                f"Sampling time must be positive, got {self.sampling_time}"
            )
        if self.aberration is not None and not is_atmosphere_model(self.aberration):
            raise ConfigurationError(
                "Aberration must expose long_exposure_otf(r) and r0, "
                f"got {type(self.aberration).__name__}"
            )

        object.__setattr__(self, "_pupil_lock", threading.Lock())
        if self.precompute_pupil:
            self.get_pupil()

    def __getstate__(self) -> dict:
        # the lock cannot be pickled and the pupil belongs to this instance
        state = self.__dict__.copy()
        state["_pupil"] = None
        state["_pupil_lock"] = None
        return state

    def __setstate__(self, state: dict) -> None:
        self.__dict__.update(state)
        object.__setattr__(self, "_pupil_lock", threading.Lock())
        if self.precompute_pupil:
            self.get_pupil()

    @property
    def obstruction_diameter(self) -> float:
        """Central obstruction diameter (ρ·D)."""
        return self.obstruction_ratio * self.diameter

    @property
    def area(self) -> float:
        """Light collecting area π·D²·(1-ρ²)/4."""
        return np.pi * self.diameter**2 * (1.0 - self.obstruction_ratio**2) / 4.0

    @property
    def field_of_view(self) -> float:
        """Field of view in radians (0 if unset)."""
        if self.field_of_view_arcsec is not None:
            return self.field_of_view_arcsec * ARCSEC_TO_RADIAN
        if self.field_of_view_arcmin is not None:
            return self.field_of_view_arcmin * ARCMIN_TO_RADIAN
        return 0.0

    @property
    def pixel_size(self) -> Optional[float]:
        """Pupil sampling step D/N, or None without a resolution."""
        if self.resolution is None:
            return None
        return self.diameter / self.resolution

    def get_pupil(self) -> Optional[np.ndarray]:
        """Return the sampled pupil mask, computing it on first call.

        The grid is computed once per instance and then reused; it is
        returned read-only. Returns None if no resolution is set.
        """
        if self._pupil is not None or self.resolution is None:
            return self._pupil
        with self._pupil_lock:
            if self._pupil is None:
                pupil = make_pupil(self.resolution, self.obstruction_ratio)
                pupil.flags.writeable = False
                object.__setattr__(self, "_pupil", pupil)
        return self._pupil

    def get_pupil_logical(self) -> Optional[np.ndarray]:
        """Return the pupil as a boolean mask."""
        pupil = self.get_pupil()
        if pupil is None:
            return None
        return pupil.astype(bool)


@dataclass(frozen=True)
class IntegrationSettings:
    """Quadrature settings for the Hankel-transform PSF.

    Attributes:
        epsabs: Absolute error tolerance passed to ``scipy.integrate.quad``.
        epsrel: Relative error tolerance.
        limit: Maximum number of adaptive subintervals per integral. The
            subdivision needed grows with f·D, the number of J0
            oscillations across the aperture; raise it for far PSF wings.
        workers: Number of threads used to evaluate independent
            frequencies. None or 1 evaluates serially. The integrand is
            Python code run under the GIL, so threads give little speedup.
    """

    epsabs: float = 1e-10
    epsrel: float = 1e-8
    limit: int = 1000
    workers: Optional[int] = None

    def __post_init__(self) -> None:
        if self.epsabs < 0 or self.epsrel < 0:
            raise ConfigurationError(
                f"Tolerances must be non-negative, got epsabs={self.epsabs}, "
                f"epsrel={self.epsrel}"
            )
        if self.epsabs == 0 and self.epsrel == 0:
            raise ConfigurationError("At least one tolerance must be positive")
        if self.limit < 1:
            raise ConfigurationError(f"limit must be >= 1, got {self.limit}")
        if self.workers is not None and self.workers < 1:
            raise ConfigurationError(f"workers must be >= 1, got {self.workers}")
