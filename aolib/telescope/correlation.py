"""Analytic correlation of circular apertures.

Overlap areas of two disks as a function of the separation of their
centers. The autocorrelation of an annular pupil is assembled from these
in :mod:`aolib.telescope.otf`.
"""

import numpy as np

__all__ = ["auto_correlation", "cross_correlation"]


def _segment(radius: float, reduced: np.ndarray) -> np.ndarray:
    """Twice the area of a circular segment, from cos of its half-angle."""
    reduced = np.clip(reduced, -1.0, 1.0)
    return radius**2 * (np.arccos(reduced) - reduced * np.sqrt(1.0 - reduced**2))


def auto_correlation(diameter: float, r: np.ndarray) -> np.ndarray:
    """Overlap area of two disks of equal diameter.

    Args:
        diameter: Disk diameter D.
        r: Center separations, any shape. The sign is ignored.

    Returns:
        Array of the same shape as ``r``:
        ``D²/2 (acos(r/D) - r/D sqrt(1 - (r/D)²))`` for r <= D, 0 beyond.

    Example:
        >>> auto_correlation(1.0, np.array([0.0, 0.5, 1.0]))
        array([0.78539816, 0.30709242, 0.        ])
    """
    r = np.abs(np.asarray(r, dtype=np.float64))
    out = np.zeros(r.shape)
    if diameter <= 0:
        return out

    inside = r <= diameter
    out[inside] = _segment(diameter, r[inside] / diameter) / 2.0
    return out


def cross_correlation(radius1: float, radius2: float, r: np.ndarray) -> np.ndarray:
    """Overlap area of two disks of radii R1 and R2.

    Three regimes, by separation r:

    - r <= |R1 - R2|: the smaller disk lies inside the larger one,
      overlap = π min(R1, R2)².
    - |R1 - R2| < r < R1 + R2: lens-shaped overlap, the sum of one
      circular segment of each disk.
    - r >= R1 + R2: disjoint disks, overlap = 0.

    Args:
        radius1: Radius R1 of the first disk.
        radius2: Radius R2 of the second disk.
        r: Center separations, any shape. The sign is ignored.

    Returns:
        Array of overlap areas with the same shape as ``r``.
    """
    r = np.abs(np.asarray(r, dtype=np.float64))
    out = np.zeros(r.shape)

    nested = r <= abs(radius1 - radius2)
    out[nested] = np.pi * min(radius1, radius2) ** 2

    lens = (r > abs(radius1 - radius2)) & (r < radius1 + radius2)
    rho = r[lens]
    # cosines of the segment half-angles (law of cosines)
    red1 = (radius1**2 - radius2**2 + rho**2) / (2.0 * rho * radius1)
    red2 = (radius2**2 - radius1**2 + rho**2) / (2.0 * rho * radius2)
    out[lens] = _segment(radius1, red1) + _segment(radius2, red2)

    disjoint = r >= radius1 + radius2
    out[disjoint] = 0.0
    return out
