"""Scan configuration for sinogram computation."""

import math
import numbers
from dataclasses import dataclass
from typing import Optional

from .constants import DEFAULT_DETECTOR_COUNT, DEFAULT_ROTATION_COUNT, DEFAULT_STEP_SIZE


class ConfigurationError(ValueError):
    """Raised when a scan configuration cannot start a run."""


@dataclass(frozen=True)
class ScanConfig:
    """Parameters of one simulated parallel-beam scan.

    Parameters
    ----------
    angle_count : int
        Number of projection angles (sinogram rows).
    detector_count : int, optional
        Number of detector elements (sinogram columns, default: 600).
    rotation_count : float, optional
        Multiplier on the swept angle; ``2.0`` covers two full turns
        (default: 1.0).
    step_size : float, optional
        Distance between samples along a ray, in pixels (default: 1.0).

    Examples
    --------
    >>> config = ScanConfig(angle_count=180, rotation_count=2)
    >>> config.validate(height=512)
    """
    angle_count: int
    detector_count: int = DEFAULT_DETECTOR_COUNT
    rotation_count: float = DEFAULT_ROTATION_COUNT
    step_size: float = DEFAULT_STEP_SIZE

    def validate(self, height: Optional[int] = None):
        """Check the configuration, optionally against the source image height.

        Raises
        ------
        ConfigurationError
            If a count is not a positive integer, the rotation count or step
            size is not a positive finite number, or the step size exceeds
            ``height`` (no sample would fit on a ray).
        """
        for name in ("angle_count", "detector_count"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                raise ConfigurationError(f"{name} must be an integer, got {value!r}")
            if value <= 0:
                raise ConfigurationError(f"{name} must be positive, got {value}")

        for name in ("rotation_count", "step_size"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Real):
                raise ConfigurationError(f"{name} must be a number, got {value!r}")
            if not math.isfinite(value) or value <= 0:
                raise ConfigurationError(f"{name} must be positive and finite, got {value}")

        if height is not None and self.sample_count(height) == 0:
            raise ConfigurationError(
                f"step_size {self.step_size} is larger than the image height {height}"
            )

    def sample_count(self, height):
        """Number of samples taken along every ray of an image of ``height`` rows."""
        return int(math.floor(height / self.step_size))
