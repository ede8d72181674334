import numpy as np
import pytest

from sinoct.geometry import projection_angles
from sinoct.utils import _trig_tables


def reference_sinogram(source, config):
    """Plain-Python line integration with the same operation order as the kernel."""
    H, W = source.shape[:2]
    n_ang, n_det = config.angle_count, config.detector_count
    cos, sin = _trig_tables(projection_angles(config))
    n_samples = config.sample_count(H)
    out = np.zeros((3, n_ang, n_det), dtype=np.float32)
    for a in range(n_ang):
        for d in range(n_det):
            offset = d - n_det * 0.5
            sums = [0.0, 0.0, 0.0]
            for k in range(n_samples):
                t = -H * 0.5 + k * config.step_size
                x = W / 2 + t * cos[a] - offset * sin[a]
                y = H / 2 + t * sin[a] + offset * cos[a]
                ix, iy = int(np.floor(x)), int(np.floor(y))
                if 0 <= ix < W and 0 <= iy < H:
                    for c in range(3):
                        sums[c] += float(source[iy, ix, c])
            for c in range(3):
                out[c, a, d] = sums[c] / n_samples
    return out


@pytest.fixture
def random_image():
    rng = np.random.default_rng(1234)
    return rng.integers(0, 256, size=(8, 8, 3), dtype=np.uint8)


@pytest.fixture
def white_image():
    return np.full((4, 4, 3), 255, dtype=np.uint8)
