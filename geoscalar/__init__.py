from .constants import XY, XYZ, XYM, XYZM
from .errors import (GeometryError, UnexpectedNullError, MalformedWKBError,
                     ShapeMismatchError, ProjectionError, UnsupportedInputError,
                     EncodingError)
from .geometry import (Geometry, Shape, Point, Polygon,
                       encode, decode, read_ewkb, write_ewkb, read_srid, read_type,
                       project, to_geojson, parse_geojson)
from .geometry.serialize import to_column, from_column, column_type, array_column_type
from .main import register

__version__ = '0.1.0'
