"""Telescope pupil mask generation."""

import logging
from typing import Optional

import numpy as np

__all__ = ["piston", "make_pupil"]

log = logging.getLogger(__name__)


def piston(n_pixel: int, n_out: Optional[int] = None) -> np.ndarray:
    """Create a centered disk indicator.

    Pixel centers are placed on a half-pixel grid so that a disk of
    ``n_pixel`` pixels diameter exactly spans ``n_pixel`` pixels when
    ``n_out == n_pixel``.

    Args:
        n_pixel: Disk diameter in pixels.
        n_out: Output grid size. Defaults to ``n_pixel``.

    Returns:
        Float array of shape (n_out, n_out), 1 inside the disk, 0 outside.
    """
    if n_out is None:
        n_out = n_pixel
    # coordinates in half-pixel units: -(n-1), -(n-3), ..., n-1
    u = np.arange(-(n_out - 1), n_out, 2, dtype=np.float64)
    x, y = np.meshgrid(u, u, indexing="xy")
    return (np.hypot(x, y) <= n_pixel).astype(np.float64)


def make_pupil(resolution: Optional[int], obstruction_ratio: float = 0.0) -> Optional[np.ndarray]:
    """Create an annular telescope pupil mask.

    Args:
        resolution: Number of pixels across the pupil (N). If None, no
            pupil can be sampled and None is returned.
        obstruction_ratio: Central obstruction diameter as a fraction of
            the pupil diameter (0 <= ρ < 1).

    Returns:
        Float array of shape (N, N) with 1 inside the clear aperture and 0
        elsewhere, or None when ``resolution`` is None.

    Example:
        >>> pupil = make_pupil(64, obstruction_ratio=0.14)
        >>> pupil.mean()  # ~ π/4 (1 - 0.14²)
    """
    if resolution is None:
        return None

    pupil = piston(resolution)
    n_obstruction = int(np.floor(resolution * obstruction_ratio + 0.5))
    if n_obstruction > 0:
        pupil = pupil - piston(n_obstruction, resolution)

    log.debug(
        "Sampled %dx%d pupil (obstruction %.3f, %d pixels on)",
        resolution,
        resolution,
        obstruction_ratio,
        int(pupil.sum()),
    )
    return pupil
