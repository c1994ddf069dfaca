import math

import pytest
from pytest import approx

from geogrids import LatLng, OSRef, UTMRef
from geogrids.exceptions import *
from tests.functions import assert_latlngs_equal


def test_latlng_init():
    c = LatLng(1., 0.)
    assert c.latitude == 1.
    assert c.longitude == 0.

    c = LatLng('1.0', '0.0')
    assert c.latitude == 1.
    assert c.longitude == 0.

    # No normalisation
    assert LatLng(0., 361.).longitude == 361.


def test_latlng_warns_out_of_range(caplog):
    c = LatLng(91., 0.)
    assert c.latitude == 91.
    assert 'not normalised' in caplog.text


def test_latlng_eq():
    assert LatLng(0., 0.) == LatLng(0., 0.)
    assert LatLng(0., 0.) != LatLng(1., 0.)
    assert LatLng(0., 0.) != (0., 0.)


def test_latlng_hash():
    coords = [
        LatLng(0., 0.),
        LatLng(0., 0.),
        LatLng(1., 1.)
    ]
    assert len(set(coords)) == 2
    assert LatLng(1., 1.) in set(coords)


def test_latlng_repr():
    assert repr(LatLng(1., 0.)) == '<LatLng(1.0, 0.0)>'
    assert str(LatLng(52.6576, 1.7174)) == '(52.6576, 1.7174)'


def test_latlng_to_dms():
    assert LatLng(51.509865, -0.118092).to_dms() == ((51, 30, 35.514, 'N'), (0, 7, 5.1312, 'W'))


def test_latlng_from_dms():
    assert LatLng.from_dms((0, 0, 0.0, 'N'), (0, 0, 0.0, 'E')) == LatLng(0., 0.)
    assert_latlngs_equal(
        LatLng.from_dms((51, 30, 35.514, 'N'), (0, 7, 5.1312, 'W')),
        LatLng(51.509865, -0.118092)
    )


def test_latlng_distance():
    london, paris = LatLng(51.5074, -0.1278), LatLng(48.8566, 2.3522)
    assert london.distance(paris) == approx(343.3, abs=1.)
    assert london.distance(paris) == paris.distance(london)

    a, b = LatLng(52.6576, 1.7174), LatLng(-33.9, 18.4)
    assert a.distance(b) == b.distance(a)

    for point in (london, paris, a, b, LatLng(90., 0.), LatLng(-12.345678, 123.456789)):
        assert point.distance(point) == 0.

    # Antipodal points sit on the edge of acos's domain
    assert LatLng(0., 0.).distance(LatLng(0., 180.)) == approx(math.pi * 6366.707)
    assert LatLng(10., 20.).distance(LatLng(-10., -160.)) == approx(math.pi * 6366.707)


def test_latlng_osgb36_to_wgs84():
    osgb36 = LatLng(52.6576, 1.7174)
    wgs84 = osgb36.osgb36_to_wgs84()

    # Returns a new object; the original is untouched
    assert osgb36 == LatLng(52.6576, 1.7174)
    assert wgs84 is not osgb36

    # The datums are ~100m apart over Great Britain
    assert 0.05 < osgb36.distance(wgs84) < 0.2


def test_latlng_datum_round_trip():
    for lat, lng in ((52.6576, 1.7174), (51.5, -0.1), (57.5, -5.5)):
        point = LatLng(lat, lng)
        back = point.osgb36_to_wgs84().wgs84_to_osgb36()
        assert point.distance(back) < 0.005

        back = point.wgs84_to_osgb36().osgb36_to_wgs84()
        assert point.distance(back) < 0.005


def test_latlng_transform_datum_non_convergence():
    from geogrids import AIRY_1830, WGS84, OSGB36_TO_WGS84

    with pytest.raises(NonConvergenceError):
        _ = LatLng(52.6576, 1.7174).transform_datum(
            AIRY_1830, WGS84, OSGB36_TO_WGS84, tolerance=0., max_iterations=2
        )


def test_latlng_to_osref():
    ref = LatLng.from_dms((52, 39, 27.2531, 'N'), (1, 43, 4.5177, 'E')).to_osref()
    assert ref.easting == approx(651409.903, abs=0.01)
    assert ref.northing == approx(313177.270, abs=0.01)
    assert ref.to_six_figure() == 'TG514131'


def test_osgb_round_trip():
    point = LatLng(52.6576, 1.7174)
    assert_latlngs_equal(point.to_osref().to_latlng(), point, abs_tol=1e-5)

    point = LatLng(54.5, -3.2)
    assert_latlngs_equal(point.to_osref().to_latlng(), point, abs_tol=1e-5)


def test_latlng_to_utmref():
    ref = LatLng(51.5, -0.1).to_utmref()
    assert ref.lng_zone == 30
    assert ref.lat_zone == 'U'

    assert str(LatLng(0., 3.).to_utmref()) == '31N 500000 0'

    ref = LatLng(58., 3.5).to_utmref()
    assert ref.lng_zone == 32
    assert ref.lat_zone == 'V'

    ref = LatLng(-33.9, 18.4).to_utmref()
    assert ref.lng_zone == 34
    assert ref.lat_zone == 'H'
    assert ref.northing > 6_000_000


def test_latlng_to_utmref_out_of_band():
    with pytest.raises(OutOfLatitudeBandError):
        _ = LatLng(85., 0.).to_utmref()

    with pytest.raises(ValueError):
        _ = LatLng(-81., 0.).to_utmref()


def test_latlng_to_utmref_out_of_zone():
    with pytest.raises(OutOfGridError):
        _ = LatLng(0., 181.).to_utmref()

    with pytest.raises(OutOfGridError):
        _ = LatLng(0., -180.5).to_utmref()

    with pytest.raises(OutOfGridError):
        _ = LatLng(0., math.nan).to_utmref()

    assert LatLng(0., 180.).to_utmref().lng_zone == 60


def test_utm_round_trip():
    point = LatLng(51.5, -0.1)
    assert_latlngs_equal(point.to_utmref().to_latlng(), point, abs_tol=1e-5)

    point = LatLng(-33.9, 18.4)
    assert_latlngs_equal(point.to_utmref().to_latlng(), point, abs_tol=1e-5)

    # Zone assigned by the Norway exception
    point = LatLng(58., 3.5)
    assert_latlngs_equal(point.to_utmref().to_latlng(), point, abs_tol=1e-5)


def test_osref_init():
    ref = OSRef(651400, 313100)
    assert ref.easting == 651400.
    assert ref.northing == 313100.

    assert OSRef(1, 2) == OSRef(1., 2.)
    assert OSRef(1, 2) != OSRef(2, 1)
    assert OSRef(1, 2) != (1, 2)
    assert len({OSRef(1, 2), OSRef(1., 2.)}) == 1


def test_osref_repr():
    assert repr(OSRef(651400, 313100)) == '<OSRef(651400.0, 313100.0)>'
    assert str(OSRef(651400, 313100)) == '(651400.0, 313100.0)'


def test_osref_from_six_figure():
    assert OSRef.from_six_figure('TG514131') == OSRef(651400, 313100)
    assert OSRef.from_six_figure('TG 514 131') == OSRef(651400, 313100)
    assert OSRef.from_six_figure('SV000000') == OSRef(0, 0)
    assert OSRef.from_six_figure('HP000000') == OSRef(400000, 1200000)
    assert OSRef.from_six_figure('NN166712') == OSRef(216600, 771200)
    assert OSRef.from_six_figure('OV999999') == OSRef(599900, 599900)


@pytest.mark.parametrize('ref', [
    'TG51413',
    'TG5141311',
    'XG514131',
    'TI514131',
    'TG5141a1',
    'tg514131',
    '',
    'TG514131\n',
    'TG٥١٤١٣١',
])
def test_osref_from_six_figure_malformed(ref):
    with pytest.raises(MalformedGridReferenceError):
        _ = OSRef.from_six_figure(ref)


def test_osref_to_six_figure():
    assert OSRef(651400, 313100).to_six_figure() == 'TG514131'
    assert OSRef(651409.903, 313177.270).to_six_figure() == 'TG514131'
    assert OSRef(0, 0).to_six_figure() == 'SV000000'
    assert OSRef(400000, 1200000).to_six_figure() == 'HP000000'
    assert OSRef(216600, 771200).to_six_figure() == 'NN166712'

    for ref in ('TG514131', 'SV000000', 'HP000000', 'NN166712', 'OV999999', 'SU123987'):
        assert OSRef.from_six_figure(ref).to_six_figure() == ref


@pytest.mark.parametrize('easting,northing', [
    (-1, 0),
    (0, -1),
    (1_000_000, 0),
    (0, 1_500_000),
    (600_000, 1_100_000),
    (math.nan, 0),
    (0, math.nan),
    (math.inf, 0),
    (0, -math.inf),
])
def test_osref_to_six_figure_out_of_grid(easting, northing):
    with pytest.raises(OutOfGridError):
        _ = OSRef(easting, northing).to_six_figure()


def test_osref_to_latlng():
    point = OSRef(651409.903, 313177.270).to_latlng()
    assert_latlngs_equal(
        point,
        LatLng.from_dms((52, 39, 27.2531, 'N'), (1, 43, 4.5177, 'E')),
        abs_tol=1e-6
    )

    with pytest.raises(NonConvergenceError):
        _ = OSRef(651409.903, 313177.270).to_latlng(max_iterations=0)


def test_utmref_init():
    ref = UTMRef(500000, 0, 'N', 31)
    assert ref.easting == 500000.
    assert ref.northing == 0.
    assert ref.lat_zone == 'N'
    assert ref.lng_zone == 31

    with pytest.raises(OutOfLatitudeBandError):
        _ = UTMRef(500000, 0, 'Z', 31)

    with pytest.raises(OutOfLatitudeBandError):
        _ = UTMRef(500000, 0, 'I', 31)

    with pytest.raises(MalformedGridReferenceError):
        _ = UTMRef(500000, 0, 'N', 0)

    with pytest.raises(MalformedGridReferenceError):
        _ = UTMRef(500000, 0, 'N', 61)

    with pytest.raises(MalformedGridReferenceError):
        _ = UTMRef(500000, 0, 'N', 31.9)

    assert UTMRef(500000, 0, 'N', 31.0).lng_zone == 31


def test_utmref_eq():
    assert UTMRef(500000, 0, 'N', 31) == UTMRef(500000., 0., 'N', 31)
    assert UTMRef(500000, 0, 'N', 31) != UTMRef(500000, 0, 'N', 32)
    assert UTMRef(500000, 0, 'N', 31) != UTMRef(500000, 0, 'P', 31)
    assert UTMRef(500000, 0, 'N', 31) != '31N 500000 0'
    assert len({UTMRef(500000, 0, 'N', 31), UTMRef(500000., 0., 'N', 31)}) == 1


def test_utmref_str():
    assert str(UTMRef(500000, 0, 'N', 31)) == '31N 500000 0'
    assert str(UTMRef(699316.5, 5710163.25, 'U', 30)) == '30U 699316.5 5710163.25'
    assert repr(UTMRef(500000, 0, 'N', 31)) == '<UTMRef(31N 500000 0)>'


def test_utmref_from_str():
    assert UTMRef.from_str('31N 500000 0') == UTMRef(500000, 0, 'N', 31)
    assert UTMRef.from_str('30U 699316.5 5710163.25') == UTMRef(699316.5, 5710163.25, 'U', 30)
    assert UTMRef.from_str(' 1C  166021  1000000 ') == UTMRef(166021, 1000000, 'C', 1)

    ref = LatLng(51.5, -0.1).to_utmref()
    assert UTMRef.from_str(str(ref)) == ref

    # Tiny northings stringify with an exponent
    ref = LatLng(1e-10, 3.).to_utmref()
    assert 'e' in str(ref)
    assert UTMRef.from_str(str(ref)) == ref
    assert UTMRef.from_str('31N 5e5 1.5E-05') == UTMRef(500000, 1.5e-05, 'N', 31)


@pytest.mark.parametrize('ref', [
    '31N500000 0',
    'N31 500000 0',
    '31n 500000 0',
    '31N 500000',
    '31N 500000 0 0',
    '٣١N 500000 0',
    '31N 500000 ٠',
    '',
])
def test_utmref_from_str_malformed(ref):
    with pytest.raises(MalformedGridReferenceError):
        _ = UTMRef.from_str(ref)


def test_utmref_from_str_invalid_zone():
    with pytest.raises(OutOfLatitudeBandError):
        _ = UTMRef.from_str('31Z 500000 0')

    with pytest.raises(MalformedGridReferenceError):
        _ = UTMRef.from_str('61N 500000 0')


def test_utmref_to_latlng():
    assert_latlngs_equal(UTMRef(500000, 0, 'N', 31).to_latlng(), LatLng(0., 3.))
    assert_latlngs_equal(UTMRef(500000, 10_000_000, 'M', 31).to_latlng(), LatLng(0., 3.))
