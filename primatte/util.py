import PIL
import PIL.Image
import numpy as np

def load_image(path, mode="RGB", interpolation=None, width=None, height=None):
    """
    Load an image as an array of dtype np.uint8, or np.uint16 for
    16 bit grayscale images. Use colorspace.to_float to convert to [0, 1].
    """
    if interpolation is None:
        interpolation = "BILINEAR"

    interpolation = interpolation.upper()

    interpolation = {
        "NEAREST": PIL.Image.NEAREST,
        "BILINEAR": PIL.Image.BILINEAR,
    }[interpolation]

    image = PIL.Image.open(path)

    if mode is not None:
        if mode == "GRAY":
            mode = "L"

        image = image.convert(mode)

    if width is not None and height is not None:
        image = image.resize((width, height), interpolation)
    elif width is not None and height is None:
        height = int(image.height*1.0*width/image.width)
        image = image.resize((width, height), interpolation)
    elif width is None and height is not None:
        width = int(image.width*1.0*height/image.height)
        image = image.resize((width, height), interpolation)

    return np.array(image)

def save_image(path, image):
    assert(image.dtype in [np.uint8, np.float32, np.float64])

    if image.dtype in [np.float32, np.float64]:
        image = np.clip(image*255, 0, 255).astype(np.uint8)

    image = PIL.Image.fromarray(image)
    image.save(path)

def blend(foreground, background, alpha):
    """
    Composite foreground over background.

    foreground: ndarray, shape [height, width, 3]
    background: ndarray, shape [height, width, 3] or RGB triple
    alpha: ndarray, shape [height, width]
    """
    alpha = alpha[:, :, np.newaxis]
    background = np.asarray(background, dtype=np.float64)
    return foreground*alpha + (1 - alpha)*background

def stack_images(*images):
    return np.concatenate([
        (image if len(image.shape) == 3 else image[:, :, np.newaxis])
        for image in images
    ], axis=2)
