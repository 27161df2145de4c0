"""Von Kármán / Kolmogorov long-exposure turbulence OTF."""

import numpy as np
from scipy.special import gamma, kv

from ...errors import ConfigurationError
from .base import AtmosphereModel

__all__ = ["VonKarmanAtmosphere"]


class VonKarmanAtmosphere(AtmosphereModel):
    """Long-exposure OTF of a von Kármán turbulence layer.

    The OTF is ``exp(B(r) - B(0))`` where ``B`` is the phase covariance

        B(r) = c * (L0/r0)^(5/3) * u^(5/6) * K_{5/6}(u),   u = 2*pi*r/L0

    with ``c = (24/5 Γ(6/5))^(5/6) Γ(11/6) / (2^(5/6) π^(8/3))``. For an
    infinite outer scale this tends to the Kolmogorov form
    ``exp(-3.44 (r/r0)^(5/3))``, which is used directly when ``L0`` is inf.

    Args:
        r0: Fried parameter at the observing wavelength (length units).
        L0: Outer scale (length units). Default inf (Kolmogorov).

    Example:
        ```python
        atm = VonKarmanAtmosphere(r0=0.15, L0=30.0)
        atm.long_exposure_otf(np.array([0.0, 0.1, 1.0]))
        ```
    """

    def __init__(self, r0: float, L0: float = np.inf):
        if not r0 > 0:
            raise ConfigurationError(f"r0 must be positive, got {r0}")
        if not L0 > 0:
            raise ConfigurationError(f"L0 must be positive, got {L0}")
        self.r0 = float(r0)
        self.L0 = float(L0)

    def _covariance_constant(self) -> float:
        return (
            (24.0 * gamma(6.0 / 5.0) / 5.0) ** (5.0 / 6.0)
            * gamma(11.0 / 6.0)
            / (2.0 ** (5.0 / 6.0) * np.pi ** (8.0 / 3.0))
            * (self.L0 / self.r0) ** (5.0 / 3.0)
        )

    def phase_variance(self) -> float:
        """Phase variance B(0) in rad²; inf for Kolmogorov turbulence."""
        if np.isinf(self.L0):
            return np.inf
        # u^(5/6) K_{5/6}(u) -> Γ(5/6) 2^(-1/6) as u -> 0
        return self._covariance_constant() * gamma(5.0 / 6.0) * 2.0 ** (-1.0 / 6.0)

    def phase_covariance(self, r: np.ndarray) -> np.ndarray:
        """Phase covariance B(r) in rad² for finite outer scale."""
        r = np.abs(np.asarray(r, dtype=np.float64))
        out = np.full(r.shape, self.phase_variance())
        nonzero = r > 0
        u = 2.0 * np.pi * r[nonzero] / self.L0
        out[nonzero] = self._covariance_constant() * u ** (5.0 / 6.0) * kv(5.0 / 6.0, u)
        return out

    def long_exposure_otf(self, r: np.ndarray) -> np.ndarray:
        r = np.abs(np.asarray(r, dtype=np.float64))
        if np.isinf(self.L0):
            return np.exp(-3.44 * (r / self.r0) ** (5.0 / 3.0))
        return np.exp(self.phase_covariance(r) - self.phase_variance())

    def __repr__(self) -> str:
        return f"VonKarmanAtmosphere(r0={self.r0}, L0={self.L0})"
