import numpy as np
import pytest
import torch

from sinoct import ImageBridge, blank_canvas, sample_pixel


@pytest.fixture
def coordinate_image():
    # Pixel (x, y) holds (x, y, 7)
    image = np.zeros((4, 5, 3), dtype=np.uint8)
    for y in range(4):
        for x in range(5):
            image[y, x] = (x, y, 7)
    return image


@pytest.mark.parametrize("x, y, expected", [
    (0.0, 0.0, (0.0, 0.0, 7.0)),
    (1.9, 0.2, (1.0, 0.0, 7.0)),
    (4.999, 3.999, (4.0, 3.0, 7.0)),
    (2.5, 1.0, (2.0, 1.0, 7.0)),
])
def test_samples_floor_toward_origin(coordinate_image, x, y, expected):
    with pytest.warns(UserWarning):
        assert sample_pixel(coordinate_image, x, y) == expected


@pytest.mark.parametrize("x, y", [
    (-0.001, 0.0),
    (0.0, -0.5),
    (5.0, 0.0),
    (0.0, 4.0),
    (-100.0, 200.0),
])
def test_out_of_bounds_returns_zero_fallback(coordinate_image, x, y):
    with pytest.warns(UserWarning):
        assert sample_pixel(coordinate_image, x, y) == (0.0, 0.0, 0.0)


def test_rgba_alpha_is_ignored():
    image = np.zeros((2, 2, 4), dtype=np.uint8)
    image[1, 0] = (10, 20, 30, 255)
    assert sample_pixel(image, 0.5, 1.5) == (10.0, 20.0, 30.0)


def test_torch_tensor_input():
    image = torch.zeros((3, 3, 3), dtype=torch.uint8)
    image[2, 1] = torch.tensor([1, 2, 3], dtype=torch.uint8)
    assert sample_pixel(image, 1.2, 2.7) == (1.0, 2.0, 3.0)


def test_as_source_copies_and_drops_alpha():
    canvas = blank_canvas(4, 4)
    source = ImageBridge.as_source(canvas)
    assert source.shape == (4, 4, 3)
    assert source.dtype == np.uint8
    assert source.flags['C_CONTIGUOUS']
    canvas[0, 0, 0] = 99
    assert source[0, 0, 0] == 0


def test_as_source_accepts_wider_integer_dtype():
    image = np.full((2, 2, 3), 200, dtype=np.int64)
    source = ImageBridge.as_source(image)
    assert source.dtype == np.uint8
    assert int(source.max()) == 200


@pytest.mark.parametrize("image", [
    np.zeros((4, 4), dtype=np.uint8),
    np.zeros((4, 4, 2), dtype=np.uint8),
    np.zeros((0, 4, 3), dtype=np.uint8),
    np.zeros((4, 4, 3), dtype=np.float32),
    np.full((2, 2, 3), 256, dtype=np.int32),
    np.full((2, 2, 3), -1, dtype=np.int32),
])
def test_invalid_rasters_are_rejected(image):
    with pytest.raises(ValueError):
        ImageBridge.as_source(image)


def test_non_square_raster_warns():
    with pytest.warns(UserWarning, match="centered"):
        ImageBridge.as_source(np.zeros((4, 6, 3), dtype=np.uint8))


def test_blank_canvas_is_opaque_black():
    canvas = blank_canvas()
    assert canvas.shape == (512, 512, 4)
    assert not canvas[..., :3].any()
    assert (canvas[..., 3] == 255).all()
