"""Exception types raised by `cwtools` routines.

All of these are raised before any partial result is returned; callers either get a fully computed
array or one of these errors.

"""


class ShapeMismatchError(ValueError):
    """Arguments cannot be broadcast to a common shape."""


class InvalidArgumentError(ValueError):
    """An argument value violates a precondition (e.g. non-positive degrees of freedom)."""


class NumericalNonConvergenceError(RuntimeError):
    """A series evaluation did not converge within its iteration cap.

    Attributes
    ----------
    indices : list of tuple
        Indices (into the broadcast input shape) of the elements which failed to converge.

    """

    def __init__(self, msg, indices=None):
        super().__init__(msg)
        self.indices = [] if (indices is None) else list(indices)
