from .__about__ import *
from .algorithm import Primatte, State, chroma_key
from .colorspace import COLOR_SPACES, to_float, to_color_space, from_color_space
from .polyhedron import BoundingPolyhedron
from .segmenter import Classification, SEGMENTERS
from .fitter import FitReport, FITTERS
from .alpha_locator import ALPHA_LOCATORS
from .errors import PrimatteError, InvalidFormat, EmptySample, NotReady, NonConvergenceWarning
from .util import load_image, save_image, blend, stack_images
