from .colorspace import COLOR_SPACES, to_float, to_color_space, from_color_space
from .sampler import sample
from .polyhedron import BoundingPolyhedron, estimate_cluster_radius
from .segmenter import SEGMENTERS
from .fitter import FITTERS
from .alpha_locator import ALPHA_LOCATORS
from .errors import NotReady, NonConvergenceWarning
from enum import IntEnum
import numpy as np
import warnings
import time

class State(IntEnum):
    UNINITIALIZED = 0
    SAMPLED = 1
    FITTED = 2
    EVALUATED = 3

def _resolve(strategy, registry, kind):
    if callable(strategy):
        return strategy

    if strategy not in registry:
        raise ValueError("Invalid %s: %s\nValid %ss are:\n%s"%(
            kind,
            strategy,
            kind,
            "\n".join("    " + name for name in registry)))

    return registry[strategy]

class Primatte:
    """
    Chroma key matting with a bounding polyhedron in color space.

    Usage:

        algorithm = Primatte(color_space="lab", grid_size=4)
        algorithm.set_input(image, background=(0.3, 0.37, 0.94))
        algorithm.analyse()
        alpha = algorithm.compute_alphas()

    The image is transformed into the working color space, reduced to a
    set of samples, and a star-shaped polyhedron centered on the
    background color is fitted to the samples. The alpha of each pixel
    is then computed from where its color lies relative to the
    polyhedron: 0 inside, 1 beyond the boundary band, linear in between.

    Parameters
    ----------
    color_space: string
        Working color space. Possible color spaces are:
            "rgb"
            "hsv"
            "lab"
    grid_size: int >= 1
        Sampling grid spacing in pixels.
    random_simplify: bool
        If to randomly thin the grid samples.
    random_simplify_percentage: float64 in [0, 100]
        Percentage of grid samples kept by random thinning.
    seed: int or None
        Seed for random thinning.
    phi_faces: int >= 3
        Number of longitude divisions of the polyhedron.
    theta_faces: int >= 3
        Number of latitude divisions of the polyhedron.
    scale_multiplier: float64 > 0
        Initial polyhedron radius relative to the estimated extent of
        the background color cluster.
    cluster_percentile: float64 in [0, 100]
        Percentile of sample distances to the background color which is
        used as extent of the background color cluster.
    segmenter: string or func(points, polyhedron, background, margin)
        Possible segmenters are:
            "margin"
    segmenter_margin: float64 >= 0
        Width of the undetermined band during fitting.
    fitter: string or func(polyhedron, samples, segmenter, margin,
            max_iterations, epsilon, print_info) -> FitReport
        Possible fitters are:
            "relaxation"
        The fitter deforms the polyhedron in place and freezes it when done.
    max_iterations: int >= 0
        Iteration cap of the fitter.
    epsilon: float64
        Convergence threshold of the fitter.
    smoothing: float64 in [0, 1]
        Smoothing strength, only used by the "relaxation" fitter.
    max_step: float64 > 0
        Maximum radius change per iteration, only used by the "relaxation"
        fitter.
    inset: float64 >= 0
        Distance the surface keeps from foreground samples, only used by
        the "relaxation" fitter.
    alpha_locator: string or func(points, polyhedron, background, margin)
        Possible alpha locators are:
            "linear"
            "smoothstep"
    alpha_margin: float64 > 0
        Width of the boundary band in which alpha goes from 0 to 1.
    chunk_size: int >= 1
        Number of pixels evaluated at once by compute_alphas.
    timer: func(name, seconds)
        Receives the duration of each processing step.
    print_info: bool
        If to print progress information.
    """

    def __init__(
        self,
        color_space="lab",
        grid_size=1,
        random_simplify=False,
        random_simplify_percentage=50.0,
        seed=None,
        phi_faces=16,
        theta_faces=8,
        scale_multiplier=1.1,
        cluster_percentile=10.0,
        segmenter="margin",
        segmenter_margin=0.05,
        fitter="relaxation",
        max_iterations=1000,
        epsilon=1e-4,
        smoothing=0.5,
        max_step=0.05,
        inset=1e-3,
        alpha_locator="linear",
        alpha_margin=0.1,
        chunk_size=65536,
        timer=None,
        print_info=False,
    ):
        if color_space not in COLOR_SPACES:
            raise ValueError("Invalid color space: %s\nValid color spaces are:\n%s"%(
                color_space,
                "\n".join("    " + name for name in COLOR_SPACES)))

        if scale_multiplier <= 0:
            raise ValueError("scale_multiplier must be positive, but is %s"%scale_multiplier)

        if alpha_margin <= 0:
            raise ValueError("alpha_margin must be positive, but is %s"%alpha_margin)

        if chunk_size < 1:
            raise ValueError("chunk_size must be at least 1, but is %s"%chunk_size)

        self.color_space = color_space
        self.grid_size = grid_size
        self.random_simplify = random_simplify
        self.random_simplify_percentage = random_simplify_percentage
        self.seed = seed
        self.phi_faces = phi_faces
        self.theta_faces = theta_faces
        self.scale_multiplier = scale_multiplier
        self.cluster_percentile = cluster_percentile
        self.segmenter = _resolve(segmenter, SEGMENTERS, "segmenter")
        self.segmenter_margin = segmenter_margin
        self.fitter = _resolve(fitter, FITTERS, "fitter")
        self.max_iterations = max_iterations
        self.epsilon = epsilon
        self.smoothing = smoothing
        self.max_step = max_step
        self.inset = inset
        self.alpha_locator = _resolve(alpha_locator, ALPHA_LOCATORS, "alpha locator")
        self.alpha_margin = alpha_margin
        self.chunk_size = chunk_size
        self.timer = timer
        self.print_info = print_info

        self._state = State.UNINITIALIZED
        self._points = None
        self._background = None
        self._reset()

    def _reset(self):
        self._samples = None
        self._polyhedron = None
        self._report = None

    def _time(self, name, start):
        if self.timer is not None:
            self.timer(name, time.perf_counter() - start)

    @property
    def state(self):
        return self._state

    @property
    def points(self):
        """Full resolution input image in working color space."""
        return self._points

    @property
    def background(self):
        return self._background

    @property
    def samples(self):
        return self._samples

    @property
    def polyhedron(self):
        """Fitted polyhedron. Its radii are read-only."""
        return self._polyhedron

    @property
    def report(self):
        return self._report

    def set_input(self, image, background):
        """
        image: ndarray, shape [height, width, 3]
            RGB image of dtype np.uint8, np.uint16 or np.float32.
        background: sequence of 3 floats in [0, 1]
            RGB background color.
        """
        start = time.perf_counter()

        rgb = to_float(image)

        background = np.asarray(background, dtype=np.float32)

        if background.shape != (3,):
            raise ValueError("background must be an RGB triple, but has shape %s"%(background.shape,))

        if not (0 <= background.min() and background.max() <= 1):
            raise ValueError("background color values must be in [0, 1], but are %s"%background)

        if self.print_info:
            print("converting %d-by-%d image to %s"%(rgb.shape[1], rgb.shape[0], self.color_space))

        self._points = to_color_space(rgb, self.color_space)
        self._background = to_color_space(background, self.color_space)
        self._points.flags.writeable = False
        self._background.flags.writeable = False

        self._reset()
        self._state = State.UNINITIALIZED

        self._time("set_input", start)

    def analyse(self):
        """
        Sample the input and fit the bounding polyhedron to the samples.
        Calling analyse again fits a new polyhedron from scratch.
        """
        if self._points is None:
            raise NotReady("No input to analyse, call set_input first")

        self._reset()
        self._state = State.UNINITIALIZED

        start = time.perf_counter()

        samples = sample(
            self._points,
            grid_size=self.grid_size,
            random_simplify=self.random_simplify,
            random_simplify_percentage=self.random_simplify_percentage,
            seed=self.seed)

        self._samples = samples
        self._state = State.SAMPLED

        if self.print_info:
            print("sampled %d points"%len(samples))

        self._time("sample", start)
        start = time.perf_counter()

        radius = self.scale_multiplier*estimate_cluster_radius(
            samples,
            self._background,
            self.color_space,
            percentile=self.cluster_percentile)

        polyhedron = BoundingPolyhedron(
            self._background,
            phi_faces=self.phi_faces,
            theta_faces=self.theta_faces,
            radius=radius,
            color_space=self.color_space)

        if self.print_info:
            print("fitting polyhedron with %d-by-%d faces, initial radius %f"%(
                self.phi_faces, self.theta_faces, radius))

        options = {}

        if self.fitter is FITTERS["relaxation"]:
            options = dict(
                smoothing=self.smoothing,
                max_step=self.max_step,
                inset=self.inset)

        report = self.fitter(
            polyhedron,
            samples,
            segmenter=self.segmenter,
            margin=self.segmenter_margin,
            max_iterations=self.max_iterations,
            epsilon=self.epsilon,
            print_info=self.print_info,
            **options)

        # the fitter hands over a read-only polyhedron
        assert(polyhedron.frozen)

        if not report.converged:
            warnings.warn(
                "Polyhedron fitting did not converge within %d iterations, "
                "using last polyhedron"%self.max_iterations,
                NonConvergenceWarning)

        self._polyhedron = polyhedron
        self._report = report
        self._state = State.FITTED

        self._time("fit", start)

    def compute_alphas(self):
        """
        Returns
        -------
        alpha: ndarray, dtype float64, shape [height, width]
        """
        if self._state < State.FITTED:
            raise NotReady("Polyhedron has not been fitted, call analyse first")

        start = time.perf_counter()

        height, width = self._points.shape[:2]
        points = self._points.reshape(-1, 3)
        n = len(points)

        alpha = np.empty(n)

        for i in range(0, n, self.chunk_size):
            alpha[i:i + self.chunk_size] = self.alpha_locator(
                points[i:i + self.chunk_size],
                self._polyhedron,
                self._background,
                self.alpha_margin)

        self._state = State.EVALUATED

        self._time("compute_alphas", start)

        return alpha.reshape(height, width)

    def sample_colors(self):
        """RGB colors of the samples, for example to draw them."""
        if self._samples is None:
            raise NotReady("No samples, call analyse first")

        return from_color_space(self._samples, self.color_space)

    def classifications(self):
        """Classification of the samples against the fitted polyhedron."""
        if self._state < State.FITTED:
            raise NotReady("Polyhedron has not been fitted, call analyse first")

        return self.segmenter(
            self._samples,
            self._polyhedron,
            self._background,
            self.segmenter_margin)

def chroma_key(image, background, **kwargs):
    """
    Compute the alpha matte of an image in front of a background of
    known color.

    image: ndarray, shape [height, width, 3]
        RGB image of dtype np.uint8, np.uint16 or np.float32.
    background: sequence of 3 floats in [0, 1]
        RGB background color.
    kwargs:
        Options of Primatte.

    Returns
    -------
    alpha: ndarray, dtype float64, shape [height, width]
    """
    algorithm = Primatte(**kwargs)
    algorithm.set_input(image, background)
    algorithm.analyse()
    return algorithm.compute_alphas()
