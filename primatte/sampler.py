from .errors import EmptySample
import numpy as np

def grid_indices(height, width, grid_size):
    """
    Pixel coordinates at the center of every complete grid cell,
    in row-major order.
    """
    offset = grid_size//2
    y = np.arange(height//grid_size)*grid_size + offset
    x = np.arange(width//grid_size)*grid_size + offset
    return np.meshgrid(y, x, indexing="ij")

def sample(
    points,
    grid_size=1,
    random_simplify=False,
    random_simplify_percentage=100.0,
    seed=None,
):
    """
    Reduce a transformed image to a point cloud for fitting.

    Parameters
    ----------
    points: ndarray, shape [height, width, 3]
        Image in working color space.
    grid_size: int >= 1
        Spacing in pixels of the sampling grid. One sample is taken at
        the center of every complete grid_size-by-grid_size cell.
    random_simplify: bool
        If to additionally keep only a random subset of the grid samples.
    random_simplify_percentage: float in [0, 100]
        Percentage of grid samples that survive random simplification.
        At least one sample is always kept.
    seed: int or None
        Seed for random simplification.

    Returns
    -------
    samples: ndarray, dtype float64, shape [n, 3], read-only
    """
    if grid_size < 1:
        raise ValueError("grid_size must be at least 1, but is %s"%grid_size)

    if not 0 <= random_simplify_percentage <= 100:
        raise ValueError("random_simplify_percentage must be in [0, 100], but is %s"%
            random_simplify_percentage)

    height, width = points.shape[:2]

    y, x = grid_indices(height, width, grid_size)

    if y.size == 0:
        raise EmptySample("Image of size %d-by-%d is smaller than one grid cell of size %d"%(
            width, height, grid_size))

    samples = points[y.ravel(), x.ravel()].astype(np.float64)

    if random_simplify:
        n = len(samples)
        count = max(1, int(round(n*random_simplify_percentage/100.0)))

        rng = np.random.default_rng(seed)
        keep = np.sort(rng.choice(n, size=count, replace=False))

        samples = samples[keep]

    samples.flags.writeable = False

    return samples
