"""Single-shape wrappers around Geometry.

A Shape is only ever built directly from coordinates of its own variant, or
by narrowing a Geometry whose type matches. Widening back to a Geometry
always succeeds.
"""

from ..constants import DEFAULT_DIMS, GEOMETRY_COLUMN_TYPE, GEOMETRY_ARRAY_COLUMN_TYPE
from ..errors import ShapeMismatchError
from .ewkb import encode, decode
from .geometry import Geometry


class Shape:
    variant = None

    column_type = GEOMETRY_COLUMN_TYPE
    array_column_type = GEOMETRY_ARRAY_COLUMN_TYPE

    __slots__ = ('_geom',)

    @classmethod
    def _wrap(cls, geom):
        shape = cls.__new__(cls)
        shape._geom = geom
        return shape

    @classmethod
    def from_geometry(cls, geom):
        """Narrow a Geometry to this shape.

        Raises ShapeMismatchError unless the geometry is exactly of this
        shape's variant. The geometry itself is left untouched.
        """
        if not isinstance(geom, Geometry):
            raise ShapeMismatchError(cls.variant, type(geom).__name__)
        if geom.type != cls.variant:
            raise ShapeMismatchError(cls.variant, geom.type)
        return cls._wrap(geom)

    @classmethod
    def decode(cls, wkb, is_null=None):
        '''decode EWKB then narrow'''
        return cls.from_geometry(decode(wkb, is_null))

    @property
    def geometry(self):
        return self._geom

    def to_geometry(self):
        '''widen back to a Geometry'''
        return self._geom

    def encode(self, dims=DEFAULT_DIMS, srid=None, hex=False):
        return encode(self._geom, dims, srid, hex)

    @property
    def __geo_interface__(self):
        return self._geom.__geo_interface__

    def __eq__(self, other):
        if not isinstance(other, Shape):
            return NotImplemented
        return type(self) is type(other) and self._geom == other._geom

    def __hash__(self):
        return hash((type(self).__name__, self._geom))

    def __repr__(self):
        return '{}({!r})'.format(type(self).__name__, self._geom.coordinates)


class Point(Shape):
    variant = 'Point'

    __slots__ = ()

    def __init__(self, x, y):
        self._geom = Geometry(self.variant, (x, y))

    @property
    def x(self):
        return self._geom.coordinates[0]

    @property
    def y(self):
        return self._geom.coordinates[1]

    @property
    def coords(self):
        return self._geom.coordinates

    def __repr__(self):
        return 'Point({!r}, {!r})'.format(self.x, self.y)


class Polygon(Shape):
    variant = 'Polygon'

    __slots__ = ()

    def __init__(self, exterior, interiors=()):
        self._geom = Geometry(self.variant, (exterior,) + tuple(interiors))

    @property
    def exterior(self):
        return self._geom.coordinates[0]

    @property
    def interiors(self):
        return self._geom.coordinates[1:]
