"""
Reference ellipsoids
"""

__all__ = ['AIRY_1830', 'Ellipsoid', 'GRS80', 'WGS84']

from geogrids._const import (
    AIRY1830_MAJOR, AIRY1830_MINOR, GRS80_MAJOR, GRS80_MINOR, WGS84_MAJOR, WGS84_MINOR
)


class Ellipsoid:
    """
    A reference ellipsoid, defined by its semi-major and semi-minor axes (meters).

    The squared eccentricity is derived once, at construction. Defaults to Airy 1830,
    the ellipsoid of the OSGB36 datum.

    Args:
        major_axis:
            The semi-major axis, in meters

        minor_axis:
            The semi-minor axis, in meters
    """

    __slots__ = ('_major_axis', '_minor_axis', '_eccentricity_squared')

    def __init__(self, major_axis: float = AIRY1830_MAJOR, minor_axis: float = AIRY1830_MINOR):
        self._major_axis = float(major_axis)
        self._minor_axis = float(minor_axis)
        self._eccentricity_squared = (
            (self._major_axis ** 2 - self._minor_axis ** 2) / self._major_axis ** 2
        )

    def __eq__(self, other):
        if not isinstance(other, Ellipsoid):
            return False

        return (
            self.major_axis == other.major_axis and
            self.minor_axis == other.minor_axis
        )

    def __hash__(self):
        return hash((self.major_axis, self.minor_axis))

    def __repr__(self):
        return f'<Ellipsoid({self.major_axis}, {self.minor_axis})>'

    @property
    def major_axis(self) -> float:
        return self._major_axis

    @property
    def minor_axis(self) -> float:
        return self._minor_axis

    @property
    def eccentricity_squared(self) -> float:
        return self._eccentricity_squared


AIRY_1830 = Ellipsoid(AIRY1830_MAJOR, AIRY1830_MINOR)
GRS80 = Ellipsoid(GRS80_MAJOR, GRS80_MINOR)
WGS84 = Ellipsoid(WGS84_MAJOR, WGS84_MINOR)
