from .errors import InvalidFormat
import numpy as np
import cv2

COLOR_SPACES = ["rgb", "hsv", "lab"]

# divisor mapping each supported pixel encoding into [0, 1]
FORMAT_SCALES = {
    np.dtype(np.uint8): 1/255.0,
    np.dtype(np.uint16): 1/65535.0,
    np.dtype(np.float32): 1.0,
}

def to_float(image):
    """
    Convert a decoded RGB image into a float32 array with values in [0, 1].

    Parameters
    ----------
    image: ndarray, shape [height, width, 3]
        dtype must be np.uint8, np.uint16 or np.float32.

    Returns
    -------
    image: ndarray, dtype float32, shape [height, width, 3]
    """
    image = np.asarray(image)

    if image.ndim != 3 or image.shape[2] != 3:
        raise InvalidFormat("Expected image of shape [height, width, 3], but got %s"%(image.shape,))

    if image.dtype not in FORMAT_SCALES:
        raise InvalidFormat("Unsupported pixel format %s, expected one of:\n%s"%(
            image.dtype,
            "\n".join("    " + str(dtype) for dtype in FORMAT_SCALES)))

    scale = FORMAT_SCALES[image.dtype]

    if scale == 1.0:
        return image.copy()

    return (image * scale).astype(np.float32)

def _check_color_space(color_space):
    if color_space not in COLOR_SPACES:
        raise ValueError("Invalid color space: %s\nValid color spaces are:\n%s"%(
            color_space,
            "\n".join("    " + name for name in COLOR_SPACES)))

def _convert(colors, code):
    # cvtColor wants a two dimensional float32 image
    colors = np.ascontiguousarray(colors, dtype=np.float32)
    shape = colors.shape
    result = cv2.cvtColor(colors.reshape(-1, 1, 3), code)
    return result.reshape(shape)

def to_color_space(rgb, color_space):
    """
    Transform RGB colors in [0, 1] into a working color space where each
    axis is normalized to [0, 1].

    rgb: ndarray, shape [..., 3]
    color_space: string
        Possible color spaces are:
            "rgb" - identity
            "hsv" - hue/360, saturation, value
            "lab" - L/100, (a + 127)/254, (b + 127)/254

    Returns
    -------
    points: ndarray, dtype float64, shape [..., 3]
    """
    _check_color_space(color_space)

    rgb = np.asarray(rgb, dtype=np.float32)
    assert(rgb.shape[-1] == 3)

    if color_space == "rgb":
        return rgb.astype(np.float64)

    if color_space == "hsv":
        hsv = _convert(rgb, cv2.COLOR_RGB2HSV).astype(np.float64)
        hsv[..., 0] /= 360.0
        # hue of exactly 360 degrees is the same as 0
        hsv[..., 0] %= 1.0
        return hsv

    lab = _convert(rgb, cv2.COLOR_RGB2Lab).astype(np.float64)
    lab[..., 0] /= 100.0
    lab[..., 1:] = (lab[..., 1:] + 127.0)/254.0
    return lab

def from_color_space(points, color_space):
    """
    Inverse of to_color_space. Returns RGB colors clipped to [0, 1].
    """
    _check_color_space(color_space)

    points = np.array(points, dtype=np.float64)
    assert(points.shape[-1] == 3)

    if color_space == "rgb":
        rgb = points

    elif color_space == "hsv":
        points[..., 0] = (points[..., 0] % 1.0)*360.0
        rgb = _convert(points, cv2.COLOR_HSV2RGB)

    else:
        points[..., 0] *= 100.0
        points[..., 1:] = points[..., 1:]*254.0 - 127.0
        rgb = _convert(points, cv2.COLOR_Lab2RGB)

    return np.clip(rgb.astype(np.float64), 0, 1)

def color_offsets(points, center, color_space):
    """
    Difference vectors from center to points. The hue axis of "hsv" is
    circular, so its difference is wrapped into [-0.5, 0.5).
    """
    offsets = np.asarray(points, dtype=np.float64) - np.asarray(center, dtype=np.float64)

    if color_space == "hsv":
        offsets[..., 0] = (offsets[..., 0] + 0.5) % 1.0 - 0.5

    return offsets
