"""
Constants declarations for geogrids
"""

# Airy 1830 Ellipsoid Constants (OSGB36)
AIRY1830_MAJOR = 6377563.396  # Major axis (meters)
AIRY1830_MINOR = 6356256.909  # Minor axis (meters)

# GRS80 Ellipsoid Constants
GRS80_MAJOR = 6378137.0
GRS80_MINOR = 6356752.3141

# WGS84 Ellipsoid Constants
WGS84_MAJOR = 6378137.0
WGS84_MINOR = 6356752.3142

# Mean Earth Radius (spherical law of cosines)
EARTH_RADIUS_KM = 6366.707

# UTM grid
UTM_SCALE_FACTOR = 0.9996
UTM_FALSE_EASTING = 500000.0
UTM_FALSE_NORTHING_SOUTH = 10000000.0

# Iterative solvers
GEODETIC_TOLERANCE_RADIANS = 1e-12
GEODETIC_MAX_ITERATIONS = 10
FOOTPOINT_TOLERANCE_METERS = 0.001
FOOTPOINT_MAX_ITERATIONS = 100
