
from geogrids._version import __version__  # noqa: F401
from geogrids.utils.logging import LOGGER
from geogrids.coordinates import LatLng, OSRef, UTMRef
from geogrids.datums import HelmertParameters, OSGB36_TO_WGS84, WGS84_TO_OSGB36
from geogrids.ellipsoids import AIRY_1830, GRS80, WGS84, Ellipsoid
from geogrids.exceptions import (
    GeoGridsError, MalformedGridReferenceError, NonConvergenceError, OutOfGridError,
    OutOfLatitudeBandError
)
from geogrids.projections import (
    OSGB_NATIONAL_GRID, TransverseMercator, utm_latitude_zone_letter, utm_longitude_zone
)

__all__ = [
    'AIRY_1830',
    'Ellipsoid',
    'GRS80',
    'GeoGridsError',
    'HelmertParameters',
    'LatLng',
    'LOGGER',
    'MalformedGridReferenceError',
    'NonConvergenceError',
    'OSGB36_TO_WGS84',
    'OSGB_NATIONAL_GRID',
    'OSRef',
    'OutOfGridError',
    'OutOfLatitudeBandError',
    'TransverseMercator',
    'UTMRef',
    'WGS84',
    'WGS84_TO_OSGB36',
    'utm_latitude_zone_letter',
    'utm_longitude_zone',
]
