"""Sinogram buffers, running extremes and rendering.

A :class:`Sinogram` owns everything a single computation run mutates: the
per-channel buffers, the global extremes and the row cursor. Rows are
integrated strictly in increasing angle order and can be rendered to an
8-bit raster at any point of the run.
"""

import logging
from dataclasses import dataclass

import numpy as np
import torch

from .constants import _DTYPE, _INF, _N_CHANNELS, _PIXEL_DTYPE
from .geometry import projection_angles
from .kernels import _integrate_row_kernel, _render_rows_kernel, _sample_pixel
from .utils import ImageBridge, _trig_tables


def sample_pixel(image, x, y):
    """Nearest-lower pixel of `image` at continuous coordinates (x, y).

    Parameters
    ----------
    image : numpy.ndarray or torch.Tensor
        Raster of shape (H, W, 3) or (H, W, 4).
    x, y : float
        Continuous pixel coordinates.

    Returns
    -------
    tuple of float
        ``(r, g, b)``, or ``(0, 0, 0)`` when ``(floor(x), floor(y))`` lies
        outside the raster.

    Examples
    --------
    >>> image = np.full((2, 2, 3), 7, dtype=np.uint8)
    >>> sample_pixel(image, 1.9, 0.2)
    (7.0, 7.0, 7.0)
    >>> sample_pixel(image, -0.1, 0.2)
    (0.0, 0.0, 0.0)
    """
    source = ImageBridge.as_source(image)
    Ny, Nx = source.shape[:2]
    return _sample_pixel(source, Nx, Ny, float(x), float(y))


@dataclass
class Extremes:
    """Running minimum and maximum over every computed cell of every channel."""
    minimum: float = _INF
    maximum: float = -_INF

    @property
    def is_empty(self):
        return self.minimum > self.maximum

    def fold(self, low, high):
        """Widen the extremes to include the interval [low, high]."""
        if low < self.minimum:
            self.minimum = float(low)
        if high > self.maximum:
            self.maximum = float(high)


class Sinogram:
    """Incrementally computed parallel-beam sinogram of one source raster.

    Parameters
    ----------
    image : numpy.ndarray or torch.Tensor
        Source raster of shape (H, W, 3) or (H, W, 4) with 8-bit channels.
        It is copied once; later edits of the caller's raster do not affect
        the run.
    config : ScanConfig
        Scan parameters.

    Raises
    ------
    ConfigurationError
        If `config` is invalid. Nothing is allocated in that case.
    ValueError
        If `image` is not a valid raster.

    Examples
    --------
    >>> sino = Sinogram(blank_canvas(64, 64), ScanConfig(angle_count=8, detector_count=96))
    >>> while not sino.complete:
    ...     sino.compute_row()
    >>> sino.render().shape
    (8, 96, 4)
    """

    def __init__(self, image, config):
        self.logger = logging.getLogger(__name__)
        config.validate()
        source = ImageBridge.as_source(image)
        config.validate(height=source.shape[0])

        self.config = config
        self.source = source
        self.height, self.width = source.shape[:2]
        self.n_samples = config.sample_count(self.height)
        self._cos, self._sin = _trig_tables(projection_angles(config))

        # NaN marks cells beyond the computed frontier
        self.channels = np.full(
            (_N_CHANNELS, config.angle_count, config.detector_count), np.nan, dtype=_DTYPE
        )
        self.extremes = Extremes()
        self.rows_done = 0

    @property
    def complete(self):
        return self.rows_done >= self.config.angle_count

    @property
    def shape(self):
        """(angle_count, detector_count)."""
        return self.config.angle_count, self.config.detector_count

    def compute_row(self):
        """Integrate the next row and fold it into the extremes.

        Returns
        -------
        int
            Index of the row that was computed.

        Raises
        ------
        IndexError
            If every row has already been computed.
        """
        if self.complete:
            raise IndexError(f"All {self.config.angle_count} rows are already computed")

        iang = self.rows_done
        row_min, row_max = _integrate_row_kernel(
            self.source, self.width, self.height,
            self.channels, iang, self.config.detector_count,
            float(self._cos[iang]), float(self._sin[iang]),
            self.width / 2, self.height / 2,
            float(self.config.step_size), self.n_samples,
        )
        self.extremes.fold(row_min, row_max)
        self.rows_done = iang + 1
        self.logger.debug(
            f"Row {iang} integrated: row range [{row_min}, {row_max}], "
            f"global range [{self.extremes.minimum}, {self.extremes.maximum}]"
        )
        return iang

    def render(self, out=None):
        """Rescale every computed row to an 8-bit RGBA raster.

        Parameters
        ----------
        out : numpy.ndarray, optional
            Raster of shape (angle_count, detector_count, 4), dtype uint8, to
            write into. Rows not yet computed are left untouched. A new
            zero-filled raster is allocated when omitted.

        Returns
        -------
        numpy.ndarray
            The rendered raster.
        """
        n_ang, n_det = self.shape
        if out is None:
            out = np.zeros((n_ang, n_det, _N_CHANNELS + 1), dtype=_PIXEL_DTYPE)
        elif out.shape != (n_ang, n_det, _N_CHANNELS + 1) or out.dtype != _PIXEL_DTYPE:
            raise ValueError(
                f"Output raster must be uint8 of shape {(n_ang, n_det, _N_CHANNELS + 1)}, "
                f"got {out.dtype} {out.shape}"
            )
        if self.rows_done:
            _render_rows_kernel(
                self.channels, self.rows_done, n_det,
                self.extremes.minimum, self.extremes.maximum, out,
            )
        return out

    def computed(self):
        """View of the channel buffers restricted to computed rows, shape (3, rows_done, n_det)."""
        return self.channels[:, :self.rows_done]

    def flat_channels(self):
        """Per-channel buffers as flat arrays of length angle_count * detector_count."""
        return tuple(self.channels[c].reshape(-1) for c in range(_N_CHANNELS))

    def to_tensor(self, device='cpu'):
        """Channel buffers as a float32 tensor of shape (3, angle_count, detector_count)."""
        return torch.from_numpy(self.channels.copy()).to(device)
