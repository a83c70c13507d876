from primatte.colorspace import COLOR_SPACES, to_float, to_color_space, from_color_space, color_offsets
from primatte.errors import InvalidFormat
import numpy as np
import pytest

def boundary_colors():
    return np.array([
        [0.0, 0.0, 0.0],
        [1.0, 1.0, 1.0],
        [1.0, 0.0, 0.0],
        [0.0, 1.0, 0.0],
        [0.0, 0.0, 1.0],
        # hue 359 degrees, neighbour of pure red across the hue seam
        [1.0, 0.0, 1/60],
        [0.5, 0.5, 0.5],
        [0.306, 0.369, 0.937],
    ])

@pytest.mark.parametrize("color_space", COLOR_SPACES)
def test_round_trip(color_space):
    np.random.seed(0)
    colors = np.concatenate([boundary_colors(), np.random.rand(200, 3)])

    points = to_color_space(colors, color_space)
    result = from_color_space(points, color_space)

    assert(points.dtype == np.float64)
    assert(points.shape == colors.shape)
    assert(np.allclose(result, colors, atol=2e-3))

@pytest.mark.parametrize("color_space", COLOR_SPACES)
def test_normalized_range(color_space):
    np.random.seed(1)
    colors = np.concatenate([boundary_colors(), np.random.rand(500, 3)])

    points = to_color_space(colors, color_space)

    assert(points.min() >= -1e-6)
    assert(points.max() <= 1 + 1e-6)

def test_known_values():
    black, white = to_color_space([[0, 0, 0], [1, 1, 1]], "lab")
    assert(np.allclose(black, [0.0, 0.5, 0.5], atol=1e-3))
    assert(np.allclose(white, [1.0, 0.5, 0.5], atol=1e-3))

    red, blue = to_color_space([[1, 0, 0], [0, 0, 1]], "hsv")
    assert(np.allclose(red, [0.0, 1.0, 1.0], atol=1e-6))
    assert(np.allclose(blue, [240/360, 1.0, 1.0], atol=1e-5))

    rgb = to_color_space([0.1, 0.2, 0.3], "rgb")
    assert(np.allclose(rgb, [0.1, 0.2, 0.3]))

def test_hue_wrap():
    red, almost_red = to_color_space([[1, 0, 0], [1, 0, 1/60]], "hsv")

    assert(np.isclose(almost_red[0], 359/360, atol=1e-5))

    offset = color_offsets(almost_red, red, "hsv")
    assert(np.isclose(offset[0], -1/360, atol=1e-5))

    # the same difference is not wrapped in other color spaces
    offset = color_offsets(almost_red, red, "rgb")
    assert(np.isclose(offset[0], 359/360, atol=1e-5))

def test_to_float():
    image = np.array([[[0, 128, 255]]], dtype=np.uint8)
    assert(np.allclose(to_float(image), [[[0, 128/255, 1]]]))
    assert(to_float(image).dtype == np.float32)

    image = np.array([[[0, 65535, 32768]]], dtype=np.uint16)
    assert(np.allclose(to_float(image), [[[0, 1, 32768/65535]]]))

    image = np.random.rand(4, 5, 3).astype(np.float32)
    result = to_float(image)
    assert(np.array_equal(result, image))
    assert(result is not image)

@pytest.mark.parametrize("image", [
    np.zeros((4, 4, 3), dtype=np.float64),
    np.zeros((4, 4, 3), dtype=np.int32),
    np.zeros((4, 4, 3), dtype=bool),
    np.zeros((4, 4), dtype=np.uint8),
    np.zeros((4, 4, 4), dtype=np.uint8),
])
def test_invalid_format(image):
    with pytest.raises(InvalidFormat):
        to_float(image)

def test_invalid_color_space():
    with pytest.raises(ValueError):
        to_color_space([0, 0, 0], "cmyk")

    with pytest.raises(ValueError):
        from_color_space([0, 0, 0], "yuv")
