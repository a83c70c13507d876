import numpy as np

def _ramp(points, polyhedron, background, margin):
    if margin <= 0:
        raise ValueError("margin must be positive, but is %s"%margin)

    assert(np.allclose(background, polyhedron.center))

    distance, theta, phi = polyhedron.locate(points)
    radius = polyhedron.radius(theta, phi)

    return np.clip((distance - radius)/margin, 0, 1)

def linear_alpha(points, polyhedron, background, margin=0.1):
    """
    Alpha of color space points relative to a fitted polyhedron.

    With d the distance of a point from the background color and r the
    radius of the polyhedron in the direction of the point, alpha is
        0             if d <= r,
        1             if d >= r + margin,
        (d - r)/margin otherwise.

    Returns
    -------
    alpha: ndarray, dtype float64, shape points.shape[:-1]
    """
    return _ramp(points, polyhedron, background, margin)

def smoothstep_alpha(points, polyhedron, background, margin=0.1):
    """
    Like linear_alpha, but with a smooth transition at both ends of the
    boundary band.
    """
    t = _ramp(points, polyhedron, background, margin)
    return t*t*(3 - 2*t)

ALPHA_LOCATORS = {
    "linear": linear_alpha,
    "smoothstep": smoothstep_alpha,
}
