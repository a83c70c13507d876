from enum import IntEnum
import numpy as np

class Classification(IntEnum):
    BACKGROUND = 0
    FOREGROUND = 1
    UNDETERMINED = 2

def classify(points, polyhedron, background, margin=0.05):
    """
    Classify color space points relative to a bounding polyhedron.

    Parameters
    ----------
    points: ndarray, shape [..., 3]
    polyhedron: BoundingPolyhedron
    background: ndarray, shape [3]
        Background color in working color space. Must be the center
        of the polyhedron.
    margin: float64 >= 0
        Width of the undetermined band just outside of the surface.

    Returns
    -------
    classes: ndarray, dtype int8, shape points.shape[:-1]
        Classification.BACKGROUND for points inside the surface,
        Classification.FOREGROUND for points farther than margin outside,
        Classification.UNDETERMINED otherwise.
    """
    assert(np.allclose(background, polyhedron.center))

    if margin < 0:
        raise ValueError("margin must not be negative, but is %s"%margin)

    distance, theta, phi = polyhedron.locate(points)
    radius = polyhedron.radius(theta, phi)

    classes = np.full(distance.shape, Classification.UNDETERMINED, dtype=np.int8)
    classes[distance >= radius + margin] = Classification.FOREGROUND
    classes[distance <= radius] = Classification.BACKGROUND

    return classes

SEGMENTERS = {
    "margin": classify,
}
