from .segmenter import classify, Classification
from collections import namedtuple
import numpy as np

FitReport = namedtuple("FitReport", ["converged", "iterations", "is_background"])

def fit(
    polyhedron,
    samples,
    segmenter=classify,
    margin=0.05,
    max_iterations=1000,
    epsilon=1e-4,
    smoothing=0.5,
    max_step=0.05,
    inset=1e-3,
    print_info=False,
    callback=None,
):
    """
    Deform a bounding polyhedron by iterative relaxation so that it hugs
    the background color cluster of the samples without enclosing
    foreground colors.

    Every iteration
        1. classifies all samples against the current surface,
        2. caps the radius of each direction just inside the nearest
           foreground sample whose radius is interpolated from it,
        3. adds undetermined samples, which lie in the margin band just
           outside of the surface, to the background if no cap of their
           directions keeps the surface from reaching them,
        4. pulls the radius of each direction to the largest distance of
           the background samples whose radius is interpolated from it,
        5. smooths the radii over neighbouring directions and limits the
           change per direction to max_step.

    The surface therefore shrinks onto background samples inside of it
    and grows outwards through the background cluster as long as the
    next sample is less than margin away, until it reaches foreground
    colors or the end of the cluster.

    Samples that have been classified as background once stay
    background for the rest of the fit. Directions without samples are
    only moved by smoothing. Samples located exactly at the center carry
    no direction and are ignored.

    The polyhedron is modified in place and frozen afterwards.

    Parameters
    ----------
    polyhedron: BoundingPolyhedron
        Initial surface, centered on the background color.
    samples: ndarray, shape [n, 3]
        Sample points in working color space.
    segmenter: func(points, polyhedron, background, margin) -> classes
        Classification strategy.
    margin: float64
        Margin passed to segmenter.
    max_iterations: int >= 0
        Fitting stops after this many iterations even if the radii
        still change.
    epsilon: float64
        Fitting has converged when no radius changes by more than epsilon.
    smoothing: float64 in [0, 1]
        Weight of the neighbour average in the smoothing step.
    max_step: float64 > 0
        Maximum change of a radius per iteration.
    inset: float64 >= 0
        Distance the surface keeps from foreground samples.
    print_info: bool
        If to print convergence information.
    callback: func(iteration, radii)
        callback to inspect the radii after each iteration.

    Returns
    -------
    report: FitReport
        converged: bool
        iterations: int, number of iterations performed
        is_background: ndarray of bool, shape [n],
            samples which were used as background
    """
    if max_iterations < 0:
        raise ValueError("max_iterations must not be negative, but is %s"%max_iterations)
    if not 0 <= smoothing <= 1:
        raise ValueError("smoothing must be in [0, 1], but is %s"%smoothing)
    if max_step <= 0:
        raise ValueError("max_step must be positive, but is %s"%max_step)

    assert(not polyhedron.frozen)

    samples = np.asarray(samples, dtype=np.float64)
    assert(samples.ndim == 2 and samples.shape[1] == 3)

    background = polyhedron.center
    shape = polyhedron.radii.shape
    n_directions = polyhedron.radii.size

    # samples never move, so their directions only have to be computed once
    distance, theta, phi = polyhedron.locate(samples)
    indices, weights = polyhedron.stencil(theta, phi)
    has_direction = distance > 0

    # a sample constrains every grid direction its radius is interpolated from
    is_used = weights > 0
    sample_index = np.broadcast_to(np.arange(len(samples))[:, np.newaxis], indices.shape)

    is_background = np.zeros(len(samples), dtype=bool)

    converged = False
    iterations = 0

    for iteration in range(max_iterations):
        classes = segmenter(samples, polyhedron, background, margin)

        is_background |= (classes == Classification.BACKGROUND) & has_direction
        is_foreground = (classes == Classification.FOREGROUND) & ~is_background

        radii = polyhedron.radii.ravel().copy()

        mask = is_used & is_foreground[:, np.newaxis]
        ceiling = np.full(n_directions, np.inf)
        np.minimum.at(ceiling, indices[mask], distance[sample_index[mask]] - inset)

        # grow into the margin band where no foreground sample is in the way
        reachable = np.all(~is_used | (distance[:, np.newaxis] <= ceiling[indices]), axis=1)
        is_candidate = (classes == Classification.UNDETERMINED) & has_direction & reachable
        is_background |= is_candidate

        mask = is_used & is_background[:, np.newaxis]
        floor = np.full(n_directions, -np.inf)
        np.maximum.at(floor, indices[mask], distance[sample_index[mask]])

        target = np.where(np.isfinite(floor), floor, radii)
        target = np.minimum(target, ceiling)

        target = polyhedron.smooth(target.reshape(shape), smoothing).ravel()

        # foreground wins where both constraints apply to one direction
        target = np.minimum(np.maximum(target, floor), ceiling)

        new_radii = radii + np.clip(target - radii, -max_step, max_step)
        new_radii = np.maximum(new_radii, 0.0)

        change = np.max(np.abs(new_radii - radii))

        polyhedron.radii[...] = new_radii.reshape(shape)

        iterations = iteration + 1

        if print_info:
            print("iteration %05d - max radius change %e - %d background, %d foreground samples"%(
                iteration,
                change,
                is_background.sum(),
                is_foreground.sum()))

        if callback is not None:
            callback(iteration, polyhedron.radii)

        if change < epsilon:
            converged = True
            if print_info:
                print("converged after %d iterations"%iterations)
            break

    polyhedron.freeze()

    return FitReport(converged, iterations, is_background)

FITTERS = {
    "relaxation": fit,
}
