"""Global constants and configuration defaults for the sinoct package.

This module defines the data types, scan defaults, status messages and the
JIT decorator shared by the sampling, integration and rendering kernels.
"""

import numpy as np
from numba import njit

# ---------------------------------------------------------------------------
# Data Types and Numerical Constants
# ---------------------------------------------------------------------------

_DTYPE = np.float32
"""Storage data type of the per-channel sinogram buffers (numpy.float32)."""

_PIXEL_DTYPE = np.uint8
"""Data type of source and output rasters (8-bit per channel)."""

_N_CHANNELS = 3
"""Number of color channels integrated along each ray (R, G, B)."""

_OPAQUE = 255
"""Alpha value written for every rendered sinogram cell."""

_FALLBACK_PIXEL = (0, 0, 0)
"""Channel triple returned for samples outside the source raster."""

# ---------------------------------------------------------------------------
# Scan Defaults
# ---------------------------------------------------------------------------

DEFAULT_IMAGE_SIZE = 512
"""Width and height of the drawing surface in the reference setup."""

DEFAULT_DETECTOR_COUNT = 600
"""Number of detector elements per projection."""

DEFAULT_STEP_SIZE = 1.0
"""Distance between consecutive samples along a ray, in pixels."""

DEFAULT_ROTATION_COUNT = 1.0
"""Number of full turns swept by the projection angles."""

# ---------------------------------------------------------------------------
# Status Messages
# ---------------------------------------------------------------------------

STATUS_STARTING = "Starting sinogram..."
STATUS_ROW_DONE = "Row {row}/{total} done..."
STATUS_COMPLETE = "Sinogram complete!"

# ---------------------------------------------------------------------------
# JIT Decorators
# ---------------------------------------------------------------------------

# No fastmath: sample coordinates are floored, so reassociated arithmetic
# could move a sample into a neighboring pixel.
_JIT_DECORATOR = njit(cache=True)
"""Numba CPU JIT decorator shared by all kernels."""

_INF = np.inf
"""Floating-point infinity used to seed the running extremes."""
