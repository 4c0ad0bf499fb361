import logging
import sqlite3

from ..constants import DEFAULT_DIMS, DEFAULT_SRID
from ..errors import EncodingError
from .ewkb import encode, decode
from .geometry import Geometry
from .shapes import Shape, Point, Polygon

logger = logging.getLogger(__name__)

# classes bound to and loaded from geometry columns, keyed by converter name
COLUMN_KINDS = {'geometry': Geometry,
                'point': Point,
                'polygon': Polygon}


def column_type(kind):
    '''the column type name the query layer should match the kind against'''
    return kind.column_type


def array_column_type(kind):
    '''the array column type name, None for kinds without one'''
    return kind.array_column_type


def to_column(value, dims=DEFAULT_DIMS, srid=DEFAULT_SRID):
    # geometry or shape to an EWKB parameter
    if isinstance(value, Shape):
        value = value.to_geometry()
    if not isinstance(value, Geometry):
        raise EncodingError('cannot bind {} to a geometry column'.format(type(value).__name__))
    return encode(value, dims, srid)


def from_column(value, kind=Geometry):
    # column value to geometry, narrowed when kind is a shape
    # a None column value is a null and is refused
    geom = decode(value)
    if kind is Geometry:
        return geom
    return kind.from_geometry(geom)


def register_types(dims=DEFAULT_DIMS, srid=DEFAULT_SRID):
    """Register sqlite3 adapters and converters for the geometry classes.

    Adapters bind Geometry, Point and Polygon parameters as EWKB written with
    the given dims and srid. Converters named after COLUMN_KINDS decode
    columns declared as "geometry", "point" or "polygon", or aliased as
    "[point]", on connections opened with detect_types.

    sqlite3 keeps adapters and converters in one registry for the whole
    process, so dims and srid apply to every connection, not just one.
    """
    def adapt(value):
        return to_column(value, dims, srid)

    for name, kind in COLUMN_KINDS.items():
        sqlite3.register_adapter(kind, adapt)
        sqlite3.register_converter(name, lambda blob, kind=kind: from_column(blob, kind))
        logger.debug('registered sqlite3 adapter and converter %r for %s', name, kind.__name__)
