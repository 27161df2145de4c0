"""Full width at half maximum of the telescope PSF."""

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np
from scipy.optimize import brentq

from ..errors import IntegrationError
from .config import IntegrationSettings, TelescopeConfig
from .psf import compute_psf

__all__ = ["full_width_half_max", "FWHMResult"]

log = logging.getLogger(__name__)


@dataclass
class FWHMResult:
    """Result of the FWHM root search.

    Attributes:
        value: FWHM in spatial-frequency units (1/length), always >= 0.
            Multiply by the wavelength to get radians.
        converged: Whether the root search converged within tolerance.
        diagnostic: Reason for a failed search, None on success.
        iterations: Root-finder iterations performed.
        function_calls: Number of PSF evaluations.
    """

    value: float
    converged: bool
    diagnostic: Optional[str] = None
    iterations: int = 0
    function_calls: int = 0


class _NonFiniteResidual(ArithmeticError):
    pass


class _HalfMaxResidual:
    """PSF(|x|/2) - PSF(0)/2, remembering the best finite candidate.

    PSF values are cached by frequency, so the bracket endpoints are
    evaluated once even though brentq asks for them again.
    """

    def __init__(self, telescope: TelescopeConfig, settings: Optional[IntegrationSettings]):
        self.telescope = telescope
        self.settings = settings
        self.half_peak = None
        self.best_x = 0.0
        self.best_residual = np.inf
        self.calls = 0
        self._evaluated = {}

    def _psf(self, f: float) -> float:
        if f in self._evaluated:
            return self._evaluated[f]
        self.calls += 1
        value = compute_psf(self.telescope, np.asarray(f), self.settings)
        if np.iscomplexobj(value) or not np.all(np.isfinite(value)):
            raise _NonFiniteResidual(
                f"Non-finite or complex PSF value {value} at f={f:g}"
            )
        self._evaluated[f] = float(value)
        return self._evaluated[f]

    def __call__(self, x: float) -> float:
        if self.half_peak is None:
            self.half_peak = self._psf(0.0) / 2.0
        residual = self._psf(abs(x) / 2.0) - self.half_peak
        if abs(residual) < self.best_residual:
            self.best_x = x
            self.best_residual = abs(residual)
        return residual


def _bracket(telescope: TelescopeConfig) -> float:
    """Upper end of the initial search interval."""
    if telescope.aberration is not None:
        return 2.0 / min(telescope.diameter, telescope.aberration.r0)
    return 2.0 / telescope.diameter


def full_width_half_max(
    telescope: TelescopeConfig,
    settings: Optional[IntegrationSettings] = None,
    xtol: float = 1e-9,
    maxiter: int = 100,
) -> FWHMResult:
    """Find the FWHM of the telescope PSF.

    Solves ``PSF(x/2) = PSF(0)/2`` for x on ``[0, 2/D]``, or
    ``[0, 2/min(D, r0)]`` when a turbulence model is attached, using
    Brent's method.

    A failed search (no sign change in the bracket, non-finite PSF
    values, quadrature failure, or iteration limit) does not raise: the
    result carries ``converged=False``, a diagnostic message, and the
    absolute value of the best candidate seen.

    Args:
        telescope: Telescope parameters.
        settings: Quadrature settings for the turbulence PSF path.
        xtol: Absolute tolerance on x.
        maxiter: Maximum root-finder iterations.

    Returns:
        FWHMResult. ``value`` is in 1/length; convert with
        ``aolib.utils.fwhm_to_arcsec(value, wavelength)``.

    Example:
        ```python
        result = full_width_half_max(TelescopeConfig(diameter=8.0))
        result.value  # ~1.029/8
        ```
    """
    upper = _bracket(telescope)
    residual = _HalfMaxResidual(telescope, settings)
    iterations = 0
    log.debug("Searching half maximum in [0, %g]", upper)

    try:
        lower_value = residual(0.0)
        upper_value = residual(upper)
        if lower_value * upper_value > 0:
            diagnostic = (
                f"No sign change of PSF(x/2) - PSF(0)/2 on [0, {upper:g}]"
            )
            candidate = residual.best_x
        else:
            root, info = brentq(
                residual,
                0.0,
                upper,
                xtol=xtol,
                maxiter=maxiter,
                full_output=True,
                disp=False,
            )
            iterations = info.iterations
            if info.converged:
                return FWHMResult(
                    value=abs(root),
                    converged=True,
                    iterations=iterations,
                    function_calls=residual.calls,
                )
            diagnostic = f"Root search did not converge: {info.flag}"
            candidate = root
    except (_NonFiniteResidual, IntegrationError) as exc:
        diagnostic = str(exc)
        candidate = residual.best_x

    log.warning("FWHM search failed, returning best estimate: %s", diagnostic)
    return FWHMResult(
        value=abs(candidate),
        converged=False,
        diagnostic=diagnostic,
        iterations=iterations,
        function_calls=residual.calls,
    )
