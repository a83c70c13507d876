from primatte.alpha_locator import linear_alpha, smoothstep_alpha, ALPHA_LOCATORS
from primatte.polyhedron import BoundingPolyhedron, unit_vectors
import numpy as np
import pytest

def random_polyhedron(seed=0):
    center = np.array([0.4, 0.5, 0.6])
    polyhedron = BoundingPolyhedron(center, phi_faces=12, theta_faces=6)
    polyhedron.radii[...] = np.random.RandomState(seed).uniform(0.05, 0.3, polyhedron.radii.shape)
    polyhedron.freeze()
    return polyhedron

@pytest.mark.parametrize("locate_alpha", list(ALPHA_LOCATORS.values()))
def test_monotone_along_ray(locate_alpha):
    polyhedron = random_polyhedron()
    center = polyhedron.center

    np.random.seed(0)
    t = np.linspace(0, 1, 500)

    for _ in range(20):
        direction = unit_vectors(np.random.uniform(0, np.pi), np.random.uniform(0, 2*np.pi))

        points = center + t[:, np.newaxis]*direction

        alpha = locate_alpha(points, polyhedron, center, 0.1)

        assert(np.all(np.diff(alpha) >= 0))
        assert(alpha.min() >= 0 and alpha.max() <= 1)

@pytest.mark.parametrize("locate_alpha", list(ALPHA_LOCATORS.values()))
def test_boundary_values(locate_alpha):
    polyhedron = random_polyhedron()
    center = polyhedron.center
    margin = 0.1

    assert(locate_alpha(center, polyhedron, center, margin) == 0)

    np.random.seed(1)
    theta = np.random.uniform(0, np.pi, 100)
    phi = np.random.uniform(0, 2*np.pi, 100)
    direction = unit_vectors(theta, phi)
    radius = polyhedron.radius(theta, phi)

    inside = center + 0.99*radius[:, np.newaxis]*direction
    outside = center + (radius + margin + 1e-6)[:, np.newaxis]*direction

    assert(np.all(locate_alpha(inside, polyhedron, center, margin) == 0))
    assert(np.all(locate_alpha(outside, polyhedron, center, margin) == 1))

def test_linear_ramp():
    center = np.array([0.5, 0.5, 0.5])
    polyhedron = BoundingPolyhedron(center, radius=0.2)

    direction = unit_vectors(0.7, 1.3)
    distance = np.array([0.225, 0.25, 0.275])
    points = center + distance[:, np.newaxis]*direction

    alpha = linear_alpha(points, polyhedron, center, margin=0.1)

    assert(np.allclose(alpha, [0.25, 0.5, 0.75]))

    alpha = smoothstep_alpha(points, polyhedron, center, margin=0.1)

    assert(np.allclose(alpha, [0.15625, 0.5, 0.84375]))

def test_invalid_margin():
    center = np.array([0.5, 0.5, 0.5])
    polyhedron = BoundingPolyhedron(center)

    with pytest.raises(ValueError):
        linear_alpha(center, polyhedron, center, margin=0.0)
