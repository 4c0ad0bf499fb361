import math
import numbers
from collections.abc import Sequence

from shapely.errors import ShapelyError
from shapely.geometry import mapping, shape
from shapely.wkt import loads as wkt_loads

from ..constants import GEOMETRY_COLUMN_TYPE, shptype_to_wkbtype
from ..errors import ProjectionError, UnsupportedInputError


def _ordinate(value):
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ValueError('ordinates must be numbers, got {!r}'.format(value))
    value = float(value)
    if math.isnan(value):
        raise ValueError('ordinates must not be NaN')
    return value


def _position(value):
    if isinstance(value, (str, bytes)):
        raise ValueError('a position must be a pair of numbers, got {!r}'.format(value))
    try:
        x, y = value
    except (TypeError, ValueError):
        raise ValueError('a position must be a pair of numbers, got {!r}'.format(value)) from None
    return (_ordinate(x), _ordinate(y))


def _sequence(value, item, what):
    if isinstance(value, (str, bytes)):
        raise ValueError('expected a sequence of {}s, got {!r}'.format(what, value))
    try:
        items = tuple(item(v) for v in value)
    except TypeError:
        raise ValueError('expected a sequence of {}s, got {!r}'.format(what, value)) from None
    if not items:
        raise ValueError('expected at least one {}'.format(what))
    return items


def _positions(value):
    return _sequence(value, _position, 'position')


def _rings(value):
    return _sequence(value, _positions, 'ring')


def _polygons(value):
    return _sequence(value, _rings, 'polygon')


# how the coordinates of each variant nest
_normalizers = {'Point': _position,
                'LineString': _positions,
                'Polygon': _rings,
                'MultiPoint': _positions,
                'MultiLineString': _rings,
                'MultiPolygon': _polygons}


def _drop_extra_ordinates(coords):
    if isinstance(coords, (str, bytes)) or not isinstance(coords, Sequence):
        return coords
    # positions are the innermost sequences of numbers
    if coords and isinstance(coords[0], numbers.Real):
        return tuple(coords[:2])
    return tuple(_drop_extra_ordinates(c) for c in coords)


class Geometry:
    """An immutable geometry value.

    One of the variants Point, LineString, Polygon, MultiPoint,
    MultiLineString, MultiPolygon or GeometryCollection. Coordinates are
    stored as nested tuples of floats, two ordinates per position. A polygon
    is a sequence of rings, the first being the exterior and the rest holes.

    Two geometries are equal when their types match and every coordinate
    compares equal.
    """

    column_type = GEOMETRY_COLUMN_TYPE
    array_column_type = None

    __slots__ = ('_type', '_coordinates', '_geometries')

    def __init__(self, type, coordinates=None, geometries=None):
        if type not in shptype_to_wkbtype:
            raise ValueError('unknown geometry type: {!r}'.format(type))
        if type == 'GeometryCollection':
            if coordinates is not None:
                raise ValueError('a GeometryCollection holds geometries, not coordinates')
            geometries = _sequence(geometries if geometries is not None else (),
                                   _member, 'geometry')
        else:
            if geometries is not None:
                raise ValueError('only a GeometryCollection holds geometries')
            if coordinates is None:
                raise ValueError('a {} needs coordinates'.format(type))
            coordinates = _normalizers[type](coordinates)
        self._type = type
        self._coordinates = coordinates
        self._geometries = geometries

    @property
    def type(self):
        return self._type

    @property
    def coordinates(self):
        return self._coordinates

    @property
    def geometries(self):
        return self._geometries

    def __eq__(self, other):
        if not isinstance(other, Geometry):
            return NotImplemented
        return (self._type == other._type
                and self._coordinates == other._coordinates
                and self._geometries == other._geometries)

    def __hash__(self):
        return hash((self._type, self._coordinates, self._geometries))

    def __repr__(self):
        if self._geometries is not None:
            return 'Geometry({!r}, geometries={!r})'.format(self._type, list(self._geometries))
        return 'Geometry({!r}, {!r})'.format(self._type, self._coordinates)

    @property
    def __geo_interface__(self):
        if self._geometries is not None:
            return {'type': self._type,
                    'geometries': [g.__geo_interface__ for g in self._geometries]}
        return {'type': self._type, 'coordinates': self._coordinates}

    # constructors

    @classmethod
    def from_mapping(cls, obj):
        '''GeoJSON-like mapping to geometry, ordinates beyond x and y are dropped'''
        typ = obj.get('type')
        if typ == 'GeometryCollection':
            return cls(typ, geometries=[cls.from_mapping(g) for g in obj.get('geometries', ())])
        coords = obj.get('coordinates')
        if coords is None:
            raise ValueError('a {} needs coordinates'.format(typ))
        return cls(typ, _drop_extra_ordinates(coords))

    @classmethod
    def from_shapely(cls, shp):
        if shp.is_empty:
            raise ValueError('empty geometries cannot be represented')
        return cls.from_mapping(mapping(shp))

    @classmethod
    def from_wkt(cls, wkt):
        try:
            shp = wkt_loads(wkt)
        except (ShapelyError, TypeError) as err:
            raise UnsupportedInputError('failed to parse WKT: {}'.format(err)) from err
        return cls.from_shapely(shp)

    # representation

    def to_shapely(self):
        # geos refuses some values this model holds, e.g. one point lines
        try:
            return shape(self.__geo_interface__)
        except (ShapelyError, ValueError) as err:
            raise ProjectionError('shapely cannot represent {!r}: {}'.format(self, err)) from err

    @property
    def wkt(self):
        return self.to_shapely().wkt


def _member(value):
    if not isinstance(value, Geometry):
        raise ValueError('collection members must be geometries, got {!r}'.format(value))
    return value
