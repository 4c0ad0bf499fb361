from .geometry import Geometry
from .shapes import Shape, Point, Polygon
from .ewkb import encode, decode, read_ewkb, write_ewkb, read_srid, read_type
from .geojson import project, to_geojson, parse_geojson
