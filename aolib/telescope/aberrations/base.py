"""Contract for turbulence models attached to a telescope."""

from abc import ABC, abstractmethod

import numpy as np

__all__ = ["AtmosphereModel", "is_atmosphere_model"]


class AtmosphereModel(ABC):
    """Abstract base class for long-exposure turbulence models.

    A telescope holds its atmosphere by reference only: the model is
    created, advanced and discarded by the caller. The optical-response
    functions read two things from it:

    - ``long_exposure_otf(r)``: turbulence attenuation of the OTF at
      separations ``r`` (same length unit as the telescope diameter),
      with values in [0, 1].
    - ``r0``: Fried coherence length, used to bracket the FWHM search.

    Any object exposing both members is accepted; subclassing is optional.

    Example:
        ```python
        atm = VonKarmanAtmosphere(r0=0.15, L0=30.0)
        tel = TelescopeConfig(diameter=8.0, aberration=atm)
        otf = compute_otf(tel, r)  # diffraction x turbulence
        ```
    """

    r0: float

    @abstractmethod
    def long_exposure_otf(self, r: np.ndarray) -> np.ndarray:
        """Compute the turbulence OTF factor.

        Args:
            r: Pupil-plane separations, any shape.

        Returns:
            Array of the same shape as ``r`` with values in [0, 1].
        """
        pass


def is_atmosphere_model(obj) -> bool:
    """Return True if ``obj`` satisfies the atmosphere model contract."""
    return callable(getattr(obj, "long_exposure_otf", None)) and hasattr(
        obj, "r0"
    )
