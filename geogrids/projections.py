"""
Transverse Mercator projection kernels for the British National Grid and UTM.

The National Grid uses the Redfearn series published by the Ordnance Survey; UTM
uses the standard series in the meridian distance ``A = cos(phi)(lambda - lambda0)``.
Every function works in degrees and meters at its boundary and returns plain floats.
"""

__all__ = [
    'INVALID_ZONE_LETTER', 'OSGB_NATIONAL_GRID', 'TransverseMercator', 'UTM_LATITUDE_BANDS',
    'is_southern_band', 'osgb_forward', 'osgb_inverse', 'redfearn_meridional_arc',
    'utm_central_meridian', 'utm_forward', 'utm_inverse', 'utm_latitude_zone_letter',
    'utm_longitude_zone', 'utm_meridional_arc', 'utm_zone_projection',
]

import math
from typing import NamedTuple, Tuple

from geogrids._const import (
    FOOTPOINT_MAX_ITERATIONS, FOOTPOINT_TOLERANCE_METERS, UTM_FALSE_EASTING,
    UTM_FALSE_NORTHING_SOUTH, UTM_SCALE_FACTOR
)
from geogrids.ellipsoids import AIRY_1830, WGS84, Ellipsoid
from geogrids.exceptions import NonConvergenceError
from geogrids.utils.functions import sec, sin_squared, tan_squared
from geogrids.utils.logging import LOGGER


class TransverseMercator(NamedTuple):
    """Parameters of a Transverse Mercator grid"""
    ellipsoid: Ellipsoid
    scale_factor: float
    latitude_origin: float  # degrees
    longitude_origin: float  # degrees
    false_easting: float
    false_northing: float


OSGB_NATIONAL_GRID = TransverseMercator(
    ellipsoid=AIRY_1830,
    scale_factor=0.9996012717,
    latitude_origin=49.0,
    longitude_origin=-2.0,
    false_easting=400000.0,
    false_northing=-100000.0,
)

# Latitude bands are 8 degrees tall starting at -80; X is stretched to 84
UTM_LATITUDE_BANDS = (
    'C', 'D', 'E', 'F', 'G', 'H', 'J', 'K', 'L', 'M',
    'N', 'P', 'Q', 'R', 'S', 'T', 'U', 'V', 'W', 'X',
)
INVALID_ZONE_LETTER = 'Z'

# Svalbard zones, as (min longitude, max longitude, zone)
_SVALBARD_ZONES = (
    (0.0, 9.0, 31),
    (9.0, 21.0, 33),
    (21.0, 33.0, 35),
    (33.0, 42.0, 37),
)


# -------------------------------------------------------------------------
# British National Grid (Redfearn)
# -------------------------------------------------------------------------

def redfearn_meridional_arc(phi: float, projection: TransverseMercator = OSGB_NATIONAL_GRID):
    """
    Meridional arc from the latitude of true origin to phi, scaled by the grid's
    scale factor.

    Args:
        phi:
            Latitude, in radians

        projection:
            The grid definition

    Returns:
        (float) the arc length in meters
    """
    a, b = projection.ellipsoid.major_axis, projection.ellipsoid.minor_axis
    phi0 = math.radians(projection.latitude_origin)
    n = (a - b) / (a + b)
    n2, n3 = n * n, n * n * n
    d_phi, s_phi = phi - phi0, phi + phi0

    return b * projection.scale_factor * (
        (1 + n + (5.0 / 4.0) * n2 + (5.0 / 4.0) * n3) * d_phi
        - (3 * n + 3 * n2 + (21.0 / 8.0) * n3) * math.sin(d_phi) * math.cos(s_phi)
        + ((15.0 / 8.0) * n2 + (15.0 / 8.0) * n3) * math.sin(2 * d_phi) * math.cos(2 * s_phi)
        - (35.0 / 24.0) * n3 * math.sin(3 * d_phi) * math.cos(3 * s_phi)
    )


def _radii_of_curvature(phi: float, projection: TransverseMercator) -> Tuple[float, float, float]:
    """Transverse (nu) and meridional (rho) radii, scaled, and eta squared"""
    a, e2 = projection.ellipsoid.major_axis, projection.ellipsoid.eccentricity_squared
    af0 = a * projection.scale_factor
    denominator = 1.0 - e2 * sin_squared(phi)
    nu = af0 * denominator ** -0.5
    rho = af0 * (1.0 - e2) * denominator ** -1.5
    return nu, rho, nu / rho - 1.0


def osgb_forward(
    latitude: float,
    longitude: float,
    projection: TransverseMercator = OSGB_NATIONAL_GRID
) -> Tuple[float, float]:
    """
    Projects a geodetic position onto the National Grid.

    No bounds are checked; outside Great Britain the result is numerically
    sound but meaningless.

    Args:
        latitude:
            Latitude in degrees, on the grid's datum (OSGB36)

        longitude:
            Longitude in degrees, on the grid's datum (OSGB36)

        projection:
            The grid definition

    Returns:
        (easting, northing) in meters
    """
    phi, lam = math.radians(latitude), math.radians(longitude)
    d_lam = lam - math.radians(projection.longitude_origin)

    nu, rho, eta2 = _radii_of_curvature(phi, projection)
    sin_phi, cos_phi = math.sin(phi), math.cos(phi)
    tan2 = tan_squared(phi)
    tan4 = tan2 * tan2

    i = redfearn_meridional_arc(phi, projection) + projection.false_northing
    ii = (nu / 2.0) * sin_phi * cos_phi
    iii = (nu / 24.0) * sin_phi * cos_phi ** 3 * (5.0 - tan2 + 9.0 * eta2)
    iiia = (nu / 720.0) * sin_phi * cos_phi ** 5 * (61.0 - 58.0 * tan2 + tan4)
    iv = nu * cos_phi
    v = (nu / 6.0) * cos_phi ** 3 * (nu / rho - tan2)
    vi = (nu / 120.0) * cos_phi ** 5 * (
        5.0 - 18.0 * tan2 + tan4 + 14.0 * eta2 - 58.0 * tan2 * eta2
    )

    northing = i + ii * d_lam ** 2 + iii * d_lam ** 4 + iiia * d_lam ** 6
    easting = projection.false_easting + iv * d_lam + v * d_lam ** 3 + vi * d_lam ** 5
    return easting, northing


def osgb_inverse(
    easting: float,
    northing: float,
    projection: TransverseMercator = OSGB_NATIONAL_GRID,
    **kwargs
) -> Tuple[float, float]:
    """
    Recovers the geodetic position of a National Grid easting/northing.

    The footpoint latitude is found by fixed point iteration on the meridional
    arc; latitude and longitude then follow in closed form.

    Args:
        easting:
            Easting in meters

        northing:
            Northing in meters

        projection:
            The grid definition

    Keyword Args:
        tolerance: (float) (Default 0.001)
            Allowed meridional arc residual, in meters

        max_iterations: (int) (Default 100)
            Refinements allowed before giving up

    Raises:
        NonConvergenceError: the footpoint latitude did not settle within max_iterations

    Returns:
        (latitude, longitude) in degrees, on the grid's datum
    """
    tolerance = kwargs.get('tolerance', FOOTPOINT_TOLERANCE_METERS)
    max_iterations = kwargs.get('max_iterations', FOOTPOINT_MAX_ITERATIONS)

    af0 = projection.ellipsoid.major_axis * projection.scale_factor
    target = northing - projection.false_northing

    phi = target / af0 + math.radians(projection.latitude_origin)
    residual = target - redfearn_meridional_arc(phi, projection)
    iterations = 0
    while abs(residual) >= tolerance:
        if iterations >= max_iterations:
            raise NonConvergenceError(
                f'Footpoint latitude did not converge within {max_iterations} iterations '
                f'(residual {residual} m)',
                iterations=iterations,
                residual=residual,
            )
        phi += residual / af0
        residual = target - redfearn_meridional_arc(phi, projection)
        iterations += 1

    LOGGER.debug('Footpoint latitude converged after %d iterations', iterations)

    nu, rho, eta2 = _radii_of_curvature(phi, projection)
    tan_phi, sec_phi = math.tan(phi), sec(phi)
    tan2 = tan_phi * tan_phi
    tan4 = tan2 * tan2

    vii = tan_phi / (2.0 * rho * nu)
    viii = tan_phi / (24.0 * rho * nu ** 3) * (5.0 + 3.0 * tan2 + eta2 - 9.0 * tan2 * eta2)
    ix = tan_phi / (720.0 * rho * nu ** 5) * (61.0 + 90.0 * tan2 + 45.0 * tan4)
    x = sec_phi / nu
    xi = sec_phi / (6.0 * nu ** 3) * (nu / rho + 2.0 * tan2)
    xii = sec_phi / (120.0 * nu ** 5) * (5.0 + 28.0 * tan2 + 24.0 * tan4)
    xiia = sec_phi / (5040.0 * nu ** 7) * (61.0 + 662.0 * tan2 + 1320.0 * tan4 + 720.0 * tan4 * tan2)

    d_e = easting - projection.false_easting
    latitude = phi - vii * d_e ** 2 + viii * d_e ** 4 - ix * d_e ** 6
    longitude = (
        math.radians(projection.longitude_origin)
        + x * d_e - xi * d_e ** 3 + xii * d_e ** 5 - xiia * d_e ** 7
    )
    return math.degrees(latitude), math.degrees(longitude)


# -------------------------------------------------------------------------
# UTM zoning
# -------------------------------------------------------------------------

def utm_latitude_zone_letter(latitude: float) -> str:
    """
    Looks up the UTM latitude band letter for a latitude.

    Bands are half open ([-80, -72) is C, [-72, -64) is D, ...) apart from X,
    which covers [72, 84].

    Args:
        latitude:
            Latitude in degrees

    Returns:
        (str) the band letter, or INVALID_ZONE_LETTER ('Z') outside [-80, 84]
    """
    if not -80.0 <= latitude <= 84.0:
        return INVALID_ZONE_LETTER

    index = min(int((latitude + 80.0) // 8), len(UTM_LATITUDE_BANDS) - 1)
    return UTM_LATITUDE_BANDS[index]


def is_southern_band(zone_letter: str) -> bool:
    """Whether a latitude band letter lies south of the equator"""
    return UTM_LATITUDE_BANDS.index(zone_letter) < UTM_LATITUDE_BANDS.index('N')


def utm_longitude_zone(latitude: float, longitude: float) -> int:
    """
    Works out the UTM longitude zone number (1-60) of a position, including the
    Norway and Svalbard exceptions.

    Args:
        latitude:
            Latitude in degrees

        longitude:
            Longitude in degrees

    Returns:
        (int) the zone number
    """
    if longitude == 180.0:
        # Eastern edge of the last zone
        return 60

    zone = int(math.floor((longitude + 180.0) / 6.0)) + 1

    if 56.0 <= latitude < 64.0 and 3.0 <= longitude < 12.0:
        return 32

    if 72.0 <= latitude < 84.0:
        for min_lng, max_lng, svalbard_zone in _SVALBARD_ZONES:
            if min_lng <= longitude < max_lng:
                return svalbard_zone

    return zone


def utm_central_meridian(zone: int) -> float:
    """Longitude of a zone's central meridian, in degrees"""
    return (zone - 1) * 6.0 - 180.0 + 3.0


def utm_zone_projection(zone: int, ellipsoid: Ellipsoid = WGS84) -> TransverseMercator:
    """
    The Transverse Mercator definition of a single UTM zone (northern hemisphere
    false origin; the southern offset is applied by the kernels).
    """
    return TransverseMercator(
        ellipsoid=ellipsoid,
        scale_factor=UTM_SCALE_FACTOR,
        latitude_origin=0.0,
        longitude_origin=utm_central_meridian(zone),
        false_easting=UTM_FALSE_EASTING,
        false_northing=0.0,
    )


# -------------------------------------------------------------------------
# UTM projection
# -------------------------------------------------------------------------

def utm_meridional_arc(phi: float, ellipsoid: Ellipsoid = WGS84) -> float:
    """Unscaled meridional arc from the equator to phi (radians), in meters"""
    e2 = ellipsoid.eccentricity_squared
    e4, e6 = e2 * e2, e2 * e2 * e2

    return ellipsoid.major_axis * (
        (1 - e2 / 4 - 3 * e4 / 64 - 5 * e6 / 256) * phi
        - (3 * e2 / 8 + 3 * e4 / 32 + 45 * e6 / 1024) * math.sin(2 * phi)
        + (15 * e4 / 256 + 45 * e6 / 1024) * math.sin(4 * phi)
        - (35 * e6 / 3072) * math.sin(6 * phi)
    )


def utm_forward(latitude: float, longitude: float, zone: int) -> Tuple[float, float]:
    """
    Projects a WGS84 position onto a UTM zone.

    Args:
        latitude:
            Latitude in degrees

        longitude:
            Longitude in degrees

        zone:
            The longitude zone number to project onto

    Returns:
        (easting, northing) in meters; northing carries the 10,000,000m false
        northing south of the equator
    """
    projection = utm_zone_projection(zone)
    a = projection.ellipsoid.major_axis
    e2 = projection.ellipsoid.eccentricity_squared
    ep2 = e2 / (1 - e2)
    k0 = projection.scale_factor

    phi = math.radians(latitude)
    d_lam = math.radians(longitude) - math.radians(projection.longitude_origin)

    n = a / math.sqrt(1 - e2 * sin_squared(phi))
    t = tan_squared(phi)
    c = ep2 * math.cos(phi) ** 2
    big_a = math.cos(phi) * d_lam
    m = utm_meridional_arc(phi, projection.ellipsoid)

    easting = k0 * n * (
        big_a
        + (1 - t + c) * big_a ** 3 / 6
        + (5 - 18 * t + t * t + 72 * c - 58 * ep2) * big_a ** 5 / 120
    ) + projection.false_easting

    northing = k0 * (
        m + n * math.tan(phi) * (
            big_a ** 2 / 2
            + (5 - t + 9 * c + 4 * c * c) * big_a ** 4 / 24
            + (61 - 58 * t + t * t + 600 * c - 330 * ep2) * big_a ** 6 / 720
        )
    )

    if latitude < 0:
        northing += UTM_FALSE_NORTHING_SOUTH

    return easting, northing


def utm_inverse(
    easting: float, northing: float, zone: int, zone_letter: str
) -> Tuple[float, float]:
    """
    Recovers the WGS84 position of a UTM easting/northing. Fully closed form.

    Args:
        easting:
            Easting in meters

        northing:
            Northing in meters

        zone:
            Longitude zone number

        zone_letter:
            Latitude band letter; bands south of N remove the southern false northing

    Returns:
        (latitude, longitude) in degrees
    """
    projection = utm_zone_projection(zone)
    a = projection.ellipsoid.major_axis
    e2 = projection.ellipsoid.eccentricity_squared
    ep2 = e2 / (1 - e2)
    k0 = projection.scale_factor
    e1 = (1 - math.sqrt(1 - e2)) / (1 + math.sqrt(1 - e2))

    x = easting - projection.false_easting
    y = northing
    if is_southern_band(zone_letter):
        y -= UTM_FALSE_NORTHING_SOUTH

    mu = (y / k0) / (a * (1 - e2 / 4 - 3 * e2 * e2 / 64 - 5 * e2 ** 3 / 256))
    phi1 = (
        mu
        + (3 * e1 / 2 - 27 * e1 ** 3 / 32) * math.sin(2 * mu)
        + (21 * e1 * e1 / 16 - 55 * e1 ** 4 / 32) * math.sin(4 * mu)
        + (151 * e1 ** 3 / 96) * math.sin(6 * mu)
    )

    n = a / math.sqrt(1 - e2 * sin_squared(phi1))
    t = tan_squared(phi1)
    c = ep2 * math.cos(phi1) ** 2
    r = a * (1 - e2) / (1 - e2 * sin_squared(phi1)) ** 1.5
    d = x / (n * k0)

    latitude = phi1 - (n * math.tan(phi1) / r) * (
        d * d / 2
        - (5 + 3 * t + 10 * c - 4 * c * c - 9 * ep2) * d ** 4 / 24
        + (61 + 90 * t + 298 * c + 45 * t * t - 252 * ep2 - 3 * c * c) * d ** 6 / 720
    )
    longitude = (
        d
        - (1 + 2 * t + c) * d ** 3 / 6
        + (5 - 2 * c + 28 * t - 3 * c * c + 8 * ep2 + 24 * t * t) * d ** 5 / 120
    ) / math.cos(phi1)

    return (
        math.degrees(latitude),
        projection.longitude_origin + math.degrees(longitude),
    )
