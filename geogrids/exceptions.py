"""
Exceptions raised by geogrids.

All of them derive from ValueError, so existing ``except ValueError`` handlers
continue to catch them.
"""

__all__ = [
    'GeoGridsError', 'MalformedGridReferenceError', 'NonConvergenceError',
    'OutOfGridError', 'OutOfLatitudeBandError',
]


class GeoGridsError(ValueError):
    """Base class for every geogrids error"""


class MalformedGridReferenceError(GeoGridsError):
    """A grid reference string could not be parsed"""


class OutOfGridError(GeoGridsError):
    """
    A position lies outside the grid it is being referenced against: the lettered
    100km squares of the OS grid, or the UTM longitude zones
    """


class OutOfLatitudeBandError(GeoGridsError):
    """A latitude (or zone letter) lies outside the UTM latitude bands C through X"""


class NonConvergenceError(GeoGridsError):
    """An iterative solver did not settle within its iteration budget"""

    def __init__(self, message: str, iterations: int, residual: float):
        super().__init__(message)
        self.iterations = iterations
        self.residual = residual
