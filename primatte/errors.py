class PrimatteError(Exception):
    pass

class InvalidFormat(PrimatteError, ValueError):
    """Raised when an image is not an (h, w, 3) array of uint8, uint16 or float32."""

class EmptySample(PrimatteError, ValueError):
    """Raised when an image is smaller than one sampling grid cell."""

class NotReady(PrimatteError, RuntimeError):
    """Raised when a step of the algorithm is run before its prerequisites."""

class NonConvergenceWarning(UserWarning):
    """Fitting stopped at the iteration cap. The last polyhedron is still used."""
