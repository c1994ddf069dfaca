"""
Datum transformations between geodetic coordinates on different ellipsoids.

A geodetic position is moved to geocentric cartesian space on its source ellipsoid,
shifted with a seven parameter (small rotation) Helmert transform and recovered as a
geodetic position on the target ellipsoid. Height is fixed at zero throughout.
"""

__all__ = [
    'HelmertParameters', 'OSGB36_TO_WGS84', 'WGS84_TO_OSGB36',
    'cartesian_to_geodetic', 'geodetic_to_cartesian', 'helmert_transform',
    'transform_datum',
]

import math
from typing import NamedTuple, Tuple

import numpy as np

from geogrids._const import GEODETIC_MAX_ITERATIONS, GEODETIC_TOLERANCE_RADIANS
from geogrids.ellipsoids import Ellipsoid
from geogrids.exceptions import NonConvergenceError
from geogrids.utils.functions import sin_squared
from geogrids.utils.logging import LOGGER


class HelmertParameters(NamedTuple):
    """
    Seven parameter Helmert transform.

    Translations are in meters, rotations in radians and the scale is a unitless
    delta from 1.
    """
    tx: float
    ty: float
    tz: float
    rx: float
    ry: float
    rz: float
    s: float

    @classmethod
    def from_arcseconds(
        cls,
        tx: float, ty: float, tz: float,
        rx: float, ry: float, rz: float,
        s: float
    ) -> 'HelmertParameters':
        """
        Creates a parameter set from rotations given in arcseconds

        Args:
            tx, ty, tz:
                Translations, in meters

            rx, ry, rz:
                Rotations, in arcseconds

            s:
                Scale delta (e.g. -20.4894 ppm is -0.0000204894)

        Returns:
            HelmertParameters
        """
        return cls(
            tx, ty, tz,
            math.radians(rx / 3600), math.radians(ry / 3600), math.radians(rz / 3600),
            s
        )

    def inverse(self) -> 'HelmertParameters':
        """
        Negates every parameter.

        This is a first order approximation of the reverse transform, not its
        analytic inverse. It holds to roughly a meter only over the region the
        forward parameters were fitted for.
        """
        return HelmertParameters(*(-x for x in self))

    @property
    def matrix(self) -> np.ndarray:
        """The linearised rotation/scale matrix"""
        scale = 1 + self.s
        return np.array([
            [scale, -self.rx, self.ry],
            [self.rz, scale, -self.rx],
            [-self.ry, self.rx, scale],
        ])

    @property
    def translation(self) -> np.ndarray:
        return np.array([self.tx, self.ty, self.tz])


OSGB36_TO_WGS84 = HelmertParameters.from_arcseconds(
    446.448, -124.157, 542.060,
    0.1502, 0.2470, 0.8421,
    -0.0000204894,
)
WGS84_TO_OSGB36 = OSGB36_TO_WGS84.inverse()


def geodetic_to_cartesian(
    latitude: float, longitude: float, ellipsoid: Ellipsoid
) -> Tuple[float, float, float]:
    """
    Converts a geodetic position (degrees, zero height) to geocentric cartesian
    coordinates in meters.

    Args:
        latitude:
            Latitude in degrees

        longitude:
            Longitude in degrees

        ellipsoid:
            The ellipsoid the position is expressed on

    Returns:
        (x, y, z)
    """
    phi, lam = math.radians(latitude), math.radians(longitude)
    e2 = ellipsoid.eccentricity_squared
    v = ellipsoid.major_axis / math.sqrt(1 - e2 * sin_squared(phi))

    return (
        v * math.cos(phi) * math.cos(lam),
        v * math.cos(phi) * math.sin(lam),
        (1 - e2) * v * math.sin(phi),
    )


def helmert_transform(xyz, params: HelmertParameters) -> np.ndarray:
    """
    Applies the small-rotation Helmert transform to geocentric cartesian coordinates.

    Args:
        xyz:
            A single (x, y, z) vector, or a (3, n) array of vectors

        params:
            The transform parameters

    Returns:
        np.ndarray of the same shape as the input
    """
    xyz = np.asarray(xyz, dtype=float)
    if xyz.ndim == 1:
        return params.translation + params.matrix @ xyz

    return params.translation[:, np.newaxis] + params.matrix @ xyz


def cartesian_to_geodetic(
    x: float, y: float, z: float, ellipsoid: Ellipsoid, **kwargs
) -> Tuple[float, float]:
    """
    Recovers a geodetic position from geocentric cartesian coordinates.

    Longitude is closed form; latitude is refined by fixed point iteration until
    successive values differ by less than the tolerance.

    Args:
        x, y, z:
            Geocentric coordinates, in meters

        ellipsoid:
            The ellipsoid to express the result on

    Keyword Args:
        tolerance: (float) (Default 1e-12)
            Convergence threshold on the latitude, in radians

        max_iterations: (int) (Default 10)
            Refinements allowed before giving up

    Raises:
        NonConvergenceError: the latitude did not settle within max_iterations

    Returns:
        (latitude, longitude) in degrees
    """
    tolerance = kwargs.get('tolerance', GEODETIC_TOLERANCE_RADIANS)
    max_iterations = kwargs.get('max_iterations', GEODETIC_MAX_ITERATIONS)

    a, e2 = ellipsoid.major_axis, ellipsoid.eccentricity_squared
    lam = math.atan2(y, x)
    p = math.hypot(x, y)
    phi = math.atan2(z, p * (1 - e2))

    delta = math.inf
    for iteration in range(1, max_iterations + 1):
        v = a / math.sqrt(1 - e2 * sin_squared(phi))
        phi_next = math.atan2(z + e2 * v * math.sin(phi), p)
        delta = abs(phi_next - phi)
        phi = phi_next
        if delta < tolerance:
            LOGGER.debug('Geodetic latitude converged after %d iterations', iteration)
            return math.degrees(phi), math.degrees(lam)

    raise NonConvergenceError(
        f'Geodetic latitude did not converge within {max_iterations} iterations '
        f'(last change {delta} rad)',
        iterations=max_iterations,
        residual=delta,
    )


def transform_datum(
    latitude: float,
    longitude: float,
    source: Ellipsoid,
    target: Ellipsoid,
    params: HelmertParameters,
    **kwargs
) -> Tuple[float, float]:
    """
    Moves a geodetic position from one datum to another.

    Args:
        latitude:
            Latitude in degrees, on the source datum

        longitude:
            Longitude in degrees, on the source datum

        source:
            The ellipsoid of the source datum

        target:
            The ellipsoid of the target datum

        params:
            Helmert parameters taking source cartesian coordinates to target ones

    Keyword Args:
        Passed through to cartesian_to_geodetic

    Returns:
        (latitude, longitude) in degrees, on the target datum
    """
    xyz = helmert_transform(geodetic_to_cartesian(latitude, longitude, source), params)
    return cartesian_to_geodetic(
        float(xyz[0]), float(xyz[1]), float(xyz[2]), target, **kwargs
    )
