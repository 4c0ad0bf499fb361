"""Wire codes, flags and defaults shared by the codec and the adapters."""

# EWKB base type codes
wkbtype_to_shptype = {1: 'Point',
                      2: 'LineString',
                      3: 'Polygon',
                      4: 'MultiPoint',
                      5: 'MultiLineString',
                      6: 'MultiPolygon',
                      7: 'GeometryCollection'}

shptype_to_wkbtype = dict((v, k) for k, v in wkbtype_to_shptype.items())

# high bits of the EWKB type code
EWKB_Z_FLAG = 0x80000000
EWKB_M_FLAG = 0x40000000
EWKB_SRID_FLAG = 0x20000000
EWKB_FLAGS = EWKB_Z_FLAG | EWKB_M_FLAG | EWKB_SRID_FLAG

# byte order markers
WKB_XDR = 0  # big endian
WKB_NDR = 1  # little endian

# coordinate dimensions accepted by the encoder
XY = 'xy'
XYZ = 'xyz'
XYM = 'xym'
XYZM = 'xyzm'
DIMENSIONS = (XY, XYZ, XYM, XYZM)

# column type names reported to the query layer
GEOMETRY_COLUMN_TYPE = 'geometry'
GEOMETRY_ARRAY_COLUMN_TYPE = '_geometry'

DEFAULT_DIMS = XY
DEFAULT_SRID = None
