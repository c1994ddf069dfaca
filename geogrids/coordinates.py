"""
Geodetic positions and the grid references they project to
"""

__all__ = ['LatLng', 'OSRef', 'UTMRef']

import math
import re
from typing import Tuple

from geogrids._const import EARTH_RADIUS_KM
from geogrids.datums import OSGB36_TO_WGS84, WGS84_TO_OSGB36, HelmertParameters, transform_datum
from geogrids.ellipsoids import AIRY_1830, WGS84, Ellipsoid
from geogrids.exceptions import (
    MalformedGridReferenceError, OutOfGridError, OutOfLatitudeBandError
)
from geogrids.projections import (
    INVALID_ZONE_LETTER, OSGB_NATIONAL_GRID, UTM_LATITUDE_BANDS, TransverseMercator,
    osgb_forward, osgb_inverse, utm_forward, utm_inverse, utm_latitude_zone_letter,
    utm_longitude_zone
)
from geogrids.utils.functions import round_half_up
from geogrids.utils.logging import warn_once


# Two letters (100km square) followed by three easting and three northing digits
_RE_SIX_FIGURE = re.compile(r'([HNSOT])([A-HJ-Z])([0-9]{3})([0-9]{3})')

# A decimal number as written by str(float), exponent included
_RE_NUMBER_STR = r'(-?[0-9]+(?:\.[0-9]*)?(?:[eE][-+]?[0-9]+)?)'

# '<zone><band> <easting> <northing>', e.g. '31N 500000 0'
_RE_UTM = re.compile(
    r'^\s*([0-9]{1,2})([A-Z])\s+' + _RE_NUMBER_STR + r'\s+' + _RE_NUMBER_STR + r'\s*$'
)

# False origin offset (easting, northing) of each 500km square
_MAJOR_SQUARE_OFFSETS = {
    'H': (0, 1000000),
    'N': (0, 500000),
    'O': (500000, 500000),
    'S': (0, 0),
    'T': (500000, 0),
}

# 5x5 grid of 100km squares, read west to east then north to south
_MINOR_SQUARE_LETTERS = 'ABCDEFGHJKLMNOPQRSTUVWXYZ'


def _format_number(value: float) -> str:
    """Stringifies a float, dropping the decimal part of whole numbers"""
    return str(int(value)) if float(value).is_integer() else str(value)


class LatLng:
    """
    A geodetic position (latitude/longitude in degrees).

    Positions carry no datum of their own; the conversion methods document which
    datum they expect. No range normalisation is applied.
    """

    def __init__(self, latitude: float, longitude: float):
        lat, lng = float(latitude), float(longitude)
        if not -90 <= lat <= 90:
            warn_once(
                'Latitudes outside [-90, 90] are not normalised and will propagate '
                'through conversions unchanged. (this warning will not repeat)'
            )

        self.latitude = lat
        self.longitude = lng

    def __eq__(self, other):
        if not isinstance(other, LatLng):
            return False

        return self.latitude == other.latitude and self.longitude == other.longitude

    def __hash__(self):
        return hash((self.latitude, self.longitude))

    def __repr__(self):
        return f'<LatLng({self.latitude}, {self.longitude})>'

    def __str__(self):
        return f'({self.latitude}, {self.longitude})'

    @classmethod
    def from_dms(cls, lat: Tuple[int, int, float, str], lng: Tuple[int, int, float, str]):
        """
        Creates a LatLng from a Degree Minutes Seconds (lat, lng) pair.

        The quadrant value should consist of either 'N'/'S' (latitude) or 'E'/'W' (longitude)

        Args:
            lat:
                Latitude, as a 4-tuple of
                ( <degrees> (float),  <minutes> (float), <seconds> (float), <quadrant> (str) )
            lng:
                Longitude, as a 4-tuple of
                ( <degrees> (float),  <minutes> (float), <seconds> (float), <quadrant> (str))

        Returns:
            LatLng
        """
        def convert(dms: Tuple[int, int, float, str]):
            mult = -1 if dms[3] in ('S', 'W') else 1
            return mult * (dms[0] + (dms[1] / 60) + (dms[2] / 3600))

        return LatLng(convert(lat), convert(lng))

    def to_dms(self) -> Tuple[Tuple[int, int, float, str], Tuple[int, int, float, str]]:
        """
        Converts the position to Degree Minutes Seconds

        Returns:
            ((degrees, minutes, seconds, hemisphere), (degrees, minutes, seconds, hemisphere))
            for latitude and longitude respectively
        """
        def convert(dd: float) -> Tuple[int, int, float]:
            minutes, seconds = divmod(abs(dd) * 3600, 60)
            degrees, minutes = divmod(minutes, 60)
            return int(degrees), int(minutes), round_half_up(seconds, 5)

        return (
            (*convert(self.latitude), 'N' if self.latitude >= 0 else 'S'),
            (*convert(self.longitude), 'E' if self.longitude >= 0 else 'W'),
        )

    def distance(self, other: 'LatLng') -> float:
        """
        Great circle distance to another position, using the spherical law of
        cosines on a sphere of radius 6366.707km.

        Args:
            other:
                The position to measure to

        Returns:
            (float) the distance in kilometers
        """
        if self == other:
            return 0.0

        lat1, lat2 = math.radians(self.latitude), math.radians(other.latitude)
        d_lng = math.radians(other.longitude) - math.radians(self.longitude)

        cos_angle = (
            math.sin(lat1) * math.sin(lat2) +
            math.cos(lat1) * math.cos(lat2) * math.cos(d_lng)
        )
        # Rounding can push the cosine just outside [-1, 1]
        cos_angle = max(-1.0, min(1.0, cos_angle))

        return math.acos(cos_angle) * EARTH_RADIUS_KM

    def transform_datum(
        self,
        source: Ellipsoid,
        target: Ellipsoid,
        params: HelmertParameters,
        **kwargs
    ) -> 'LatLng':
        """
        Moves this position to another datum with a Helmert transform.

        Args:
            source:
                The ellipsoid this position is expressed on

            target:
                The ellipsoid to express the result on

            params:
                Helmert parameters from the source to the target datum

        Keyword Args:
            tolerance, max_iterations: see geogrids.datums.cartesian_to_geodetic

        Returns:
            A new LatLng on the target datum
        """
        return LatLng(
            *transform_datum(self.latitude, self.longitude, source, target, params, **kwargs)
        )

    def osgb36_to_wgs84(self) -> 'LatLng':
        """Converts this position from the OSGB36 datum to WGS84"""
        return self.transform_datum(AIRY_1830, WGS84, OSGB36_TO_WGS84)

    def wgs84_to_osgb36(self) -> 'LatLng':
        """
        Converts this position from the WGS84 datum to OSGB36.

        Uses the negated OSGB36 to WGS84 parameters, so a round trip is only
        accurate to a meter or so.
        """
        return self.transform_datum(WGS84, AIRY_1830, WGS84_TO_OSGB36)

    def to_osref(self, projection: TransverseMercator = OSGB_NATIONAL_GRID) -> 'OSRef':
        """
        Projects this (OSGB36) position onto the British National Grid.

        The bounds of the grid are not checked; beyond them the resulting OSRef
        has no meaning.
        """
        return OSRef(*osgb_forward(self.latitude, self.longitude, projection))

    def to_utmref(self) -> 'UTMRef':
        """
        Projects this (WGS84) position onto its UTM zone.

        Raises:
            OutOfLatitudeBandError: the latitude lies outside [-80, 84]
            OutOfGridError: the longitude lies outside [-180, 180]

        Returns:
            UTMRef
        """
        lat_zone = utm_latitude_zone_letter(self.latitude)
        if lat_zone == INVALID_ZONE_LETTER:
            raise OutOfLatitudeBandError(
                f'Latitude {self.latitude} is outside the UTM latitude bands [-80, 84]'
            )

        if not -180.0 <= self.longitude <= 180.0:
            raise OutOfGridError(
                f'Longitude {self.longitude} is outside the UTM longitude zones [-180, 180]'
            )

        lng_zone = utm_longitude_zone(self.latitude, self.longitude)
        easting, northing = utm_forward(self.latitude, self.longitude, lng_zone)
        return UTMRef(easting, northing, lat_zone, lng_zone)


class OSRef:
    """
    A British National Grid reference.

    Eastings and northings are absolute with respect to the whole grid and are
    nominally accurate to 1m; fractional values carry greater precision. For
    example, the six-figure reference TG514131 is easting 651400, northing 313100.
    """

    def __init__(self, easting: float, northing: float):
        self.easting = float(easting)
        self.northing = float(northing)

    def __eq__(self, other):
        if not isinstance(other, OSRef):
            return False

        return self.easting == other.easting and self.northing == other.northing

    def __hash__(self):
        return hash((self.easting, self.northing))

    def __repr__(self):
        return f'<OSRef({self.easting}, {self.northing})>'

    def __str__(self):
        return f'({self.easting}, {self.northing})'

    @classmethod
    def from_six_figure(cls, ref: str) -> 'OSRef':
        """
        Creates an OSRef from a six-figure grid reference, e.g. 'TG514131'.

        The first letter must be one of H, N, S, O or T; the second any uppercase
        letter except I. Spaces are ignored.

        Args:
            ref:
                The six-figure grid reference

        Raises:
            MalformedGridReferenceError: the reference does not follow the format

        Returns:
            OSRef at the south west corner of the 100m square
        """
        match = _RE_SIX_FIGURE.fullmatch(ref.replace(' ', ''))
        if not match:
            raise MalformedGridReferenceError(f'Invalid six-figure grid reference: {ref!r}')

        major, minor, east, north = match.groups()
        offset_east, offset_north = _MAJOR_SQUARE_OFFSETS[major]
        index = _MINOR_SQUARE_LETTERS.index(minor)

        return OSRef(
            int(east) * 100 + offset_east + (index % 5) * 100000,
            int(north) * 100 + offset_north + (4 - index // 5) * 100000,
        )

    def to_six_figure(self) -> str:
        """
        Converts this grid reference into a six-figure reference including the
        two letter designation of its 100km square, e.g. 'TG514131'. Eastings and
        northings are truncated to the 100m square containing them.

        Raises:
            OutOfGridError: the reference lies outside the lettered squares

        Returns:
            str
        """
        if not (math.isfinite(self.easting) and math.isfinite(self.northing)):
            raise OutOfGridError(f'{self!r} lies outside the National Grid')

        hundred_km_e = math.floor(self.easting / 100000)
        hundred_km_n = math.floor(self.northing / 100000)

        if hundred_km_e < 0 or hundred_km_n < 0 or hundred_km_e >= 10 or hundred_km_n >= 15:
            raise OutOfGridError(f'{self!r} lies outside the National Grid')

        if hundred_km_n < 5:
            major = 'S' if hundred_km_e < 5 else 'T'
        elif hundred_km_n < 10:
            major = 'N' if hundred_km_e < 5 else 'O'
        elif hundred_km_e < 5:
            major = 'H'
        else:
            raise OutOfGridError(f'{self!r} lies outside the National Grid')

        minor = _MINOR_SQUARE_LETTERS[(4 - hundred_km_n % 5) * 5 + hundred_km_e % 5]
        east = int((self.easting - 100000 * hundred_km_e) // 100)
        north = int((self.northing - 100000 * hundred_km_n) // 100)

        return f'{major}{minor}{east:03d}{north:03d}'

    def to_latlng(self, projection: TransverseMercator = OSGB_NATIONAL_GRID, **kwargs) -> LatLng:
        """
        Converts this grid reference into an OSGB36 latitude and longitude.

        Keyword Args:
            tolerance, max_iterations: see geogrids.projections.osgb_inverse

        Returns:
            LatLng
        """
        return LatLng(*osgb_inverse(self.easting, self.northing, projection, **kwargs))


class UTMRef:
    """
    A Universal Transverse Mercator reference on the WGS84 datum.

    Northings south of the equator carry the conventional 10,000,000m offset.

    Args:
        easting:
            Easting in meters

        northing:
            Northing in meters

        lat_zone:
            Latitude band letter, C through X (excluding I and O)

        lng_zone:
            Longitude zone number, 1 through 60
    """

    def __init__(self, easting: float, northing: float, lat_zone: str, lng_zone: int):
        if lat_zone not in UTM_LATITUDE_BANDS:
            raise OutOfLatitudeBandError(f'Invalid UTM latitude band: {lat_zone!r}')

        if int(lng_zone) != lng_zone or not 1 <= int(lng_zone) <= 60:
            raise MalformedGridReferenceError(
                f'UTM longitude zone must be a whole number between 1 and 60, got {lng_zone}'
            )

        self.easting = float(easting)
        self.northing = float(northing)
        self.lat_zone = lat_zone
        self.lng_zone = int(lng_zone)

    def __eq__(self, other):
        if not isinstance(other, UTMRef):
            return False

        return (
            self.easting == other.easting and
            self.northing == other.northing and
            self.lat_zone == other.lat_zone and
            self.lng_zone == other.lng_zone
        )

    def __hash__(self):
        return hash((self.easting, self.northing, self.lat_zone, self.lng_zone))

    def __repr__(self):
        return f'<UTMRef({self})>'

    def __str__(self):
        return (
            f'{self.lng_zone}{self.lat_zone} '
            f'{_format_number(self.easting)} {_format_number(self.northing)}'
        )

    @classmethod
    def from_str(cls, ref: str) -> 'UTMRef':
        """
        Creates a UTMRef from its string form, e.g. '31N 500000 0'

        Raises:
            MalformedGridReferenceError: the string does not follow the format
            OutOfLatitudeBandError: the band letter is not a UTM latitude band

        Returns:
            UTMRef
        """
        match = _RE_UTM.match(ref)
        if not match:
            raise MalformedGridReferenceError(f'Invalid UTM reference: {ref!r}')

        lng_zone, lat_zone, easting, northing = match.groups()
        return UTMRef(float(easting), float(northing), lat_zone, int(lng_zone))

    def to_latlng(self) -> LatLng:
        """Converts this UTM reference to a WGS84 latitude and longitude"""
        return LatLng(*utm_inverse(self.easting, self.northing, self.lng_zone, self.lat_zone))
