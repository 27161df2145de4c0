"""Telescope optical transfer function."""

import numpy as np

from .config import TelescopeConfig
from .correlation import auto_correlation, cross_correlation

__all__ = ["compute_otf", "diffraction_otf"]


def diffraction_otf(telescope: TelescopeConfig, r: np.ndarray) -> np.ndarray:
    """Diffraction-limited OTF of an annular aperture.

    The pupil autocorrelation normalized by the collecting area, so that
    ``diffraction_otf(tel, 0) == 1``:

        [AC(D, r) + AC(d, r) - 2 CC(D/2, d/2, r)] / A

    with ``d = ρD`` and ``A = πD²(1-ρ²)/4``.

    Args:
        telescope: Telescope parameters.
        r: Pupil-plane separations (length units), any shape.

    Returns:
        Real OTF array, same shape as ``r``, zero for r >= D.
    """
    r = np.asarray(r, dtype=np.float64)
    D = telescope.diameter
    out = auto_correlation(D, r)
    if telescope.obstruction_ratio != 0:
        d = telescope.obstruction_diameter
        out = out + auto_correlation(d, r) - 2.0 * cross_correlation(D / 2.0, d / 2.0, r)
    return out / telescope.area


def compute_otf(telescope: TelescopeConfig, r: np.ndarray) -> np.ndarray:
    """Compute the telescope OTF, including turbulence if attached.

    Args:
        telescope: Telescope parameters. If ``telescope.aberration`` is
            set, the diffraction OTF is multiplied by its
            ``long_exposure_otf(r)``.
        r: Pupil-plane separations (length units), any shape.

    Returns:
        OTF array with the same shape as ``r``.

    Example:
        ```python
        tel = TelescopeConfig(diameter=8.0, obstruction_ratio=0.14)
        r = np.linspace(0, 8, 101)
        otf = compute_otf(tel, r)  # otf[0] == 1, otf[-1] == 0
        ```
    """
    r = np.asarray(r, dtype=np.float64)
    out = diffraction_otf(telescope, r)
    if telescope.aberration is not None:
        out = out * np.asarray(telescope.aberration.long_exposure_otf(r))
    return out
