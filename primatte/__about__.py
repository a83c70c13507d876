__all__ = [
    "__title__",
    "__summary__",
    "__version__",
    "__author__",
    "__license__",
]

__title__ = "primatte"
__summary__ = "Chroma key matting by fitting a bounding polyhedron around the background color"
__version__ = "0.1.0"
__author__ = "primatte contributors"
__license__ = "MIT"
