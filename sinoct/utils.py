"""Utility classes and helper functions for the sinoct package.

This module provides the bridge between caller-owned rasters (NumPy arrays or
PyTorch tensors) and the contiguous arrays the Numba kernels read, plus
trigonometric table generation and the blank drawing canvas.
"""

import warnings
import numpy as np
import torch

from .constants import _N_CHANNELS, _PIXEL_DTYPE, DEFAULT_IMAGE_SIZE


# ============================================================================
# Raster Bridge
# ============================================================================

class ImageBridge:
    """Bridge between caller rasters and Numba-readable source arrays."""

    @staticmethod
    def to_numpy(image):
        """Return a NumPy view or copy of a NumPy array or PyTorch tensor.

        Parameters
        ----------
        image : numpy.ndarray or torch.Tensor
            Raster on any device. Tensors are detached and moved to the CPU.

        Returns
        -------
        numpy.ndarray
            Array holding the same values as `image`.

        Examples
        --------
        >>> ImageBridge.to_numpy(torch.zeros(2, 2, 3, dtype=torch.uint8)).shape
        (2, 2, 3)
        """
        if isinstance(image, torch.Tensor):
            return image.detach().cpu().numpy()
        return np.asarray(image)

    @staticmethod
    def as_source(image):
        """Snapshot a caller raster as a contiguous ``uint8`` RGB array.

        Parameters
        ----------
        image : numpy.ndarray or torch.Tensor
            Raster of shape (H, W, 3) or (H, W, 4) with 8-bit channel values.
            A fourth (alpha) channel is dropped.

        Returns
        -------
        numpy.ndarray
            Private copy of shape (H, W, 3) and dtype uint8.

        Raises
        ------
        ValueError
            If `image` is not a non-empty 3D raster with 3 or 4 integer
            channels in the range 0..255.
        """
        array = ImageBridge.to_numpy(image)
        if array.ndim != 3:
            raise ValueError(f"Expected (H, W, C) raster, got {array.ndim}D array")
        height, width, channels = array.shape
        if channels not in (_N_CHANNELS, _N_CHANNELS + 1):
            raise ValueError(f"Expected 3 (RGB) or 4 (RGBA) channels, got {channels}")
        if height == 0 or width == 0:
            raise ValueError(f"Raster must not be empty, got shape {array.shape}")
        if not np.issubdtype(array.dtype, np.integer):
            raise ValueError(f"Raster must hold 8-bit integer channels, got dtype {array.dtype}")
        if array.dtype != _PIXEL_DTYPE and (array.min() < 0 or array.max() > 255):
            raise ValueError("Raster channel values must lie in 0..255")

        if width != height:
            warnings.warn(
                f"Source raster is {width}x{height}; only the centered "
                f"{height}x{height} square is sampled.",
                UserWarning,
                stacklevel=3,
            )
        # Always copy so later edits of the drawing surface cannot leak into a run
        return np.array(array[:, :, :_N_CHANNELS], dtype=_PIXEL_DTYPE, order='C', copy=True)


def blank_canvas(width=DEFAULT_IMAGE_SIZE, height=DEFAULT_IMAGE_SIZE):
    """Return the black RGBA raster the drawing surface starts from.

    Examples
    --------
    >>> int(blank_canvas(4, 4)[..., 3].max())
    255
    """
    canvas = np.zeros((height, width, _N_CHANNELS + 1), dtype=_PIXEL_DTYPE)
    canvas[..., _N_CHANNELS] = 255
    return canvas


# ============================================================================
# Trigonometric Table Generation
# ============================================================================

def _trig_tables(angles):
    """Compute cosine and sine tables for projection angles.

    Parameters
    ----------
    angles : array-like or torch.Tensor
        Projection angles in radians.

    Returns
    -------
    cos : numpy.ndarray
        Cosine of `angles` as float64.
    sin : numpy.ndarray
        Sine of `angles` as float64.

    Examples
    --------
    >>> cos, sin = _trig_tables([0.0])
    >>> float(cos[0]), float(sin[0])
    (1.0, 0.0)
    """
    if isinstance(angles, torch.Tensor):
        angles_cpu = angles.detach().to(device='cpu', dtype=torch.float64)
    else:
        angles_cpu = torch.as_tensor(np.asarray(angles, dtype=np.float64))
    return torch.cos(angles_cpu).numpy(), torch.sin(angles_cpu).numpy()
