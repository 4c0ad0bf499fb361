"""GraphQL scalars for points and polygons.

Output is a bare coordinate list rather than GeoJSON: a point serializes to
[x, y] and a polygon to the [x, y] pairs of its exterior ring. Input is only
accepted as a GeoJSON string.
"""

from graphql import GraphQLError, GraphQLScalarType
from graphql.language import StringValueNode

from ..errors import ShapeMismatchError, UnsupportedInputError
from .geojson import parse_geojson
from .geometry import Geometry
from .shapes import Point, Polygon


def _output_shape(kind, value):
    if isinstance(value, kind):
        return value
    if isinstance(value, Geometry):
        try:
            return kind.from_geometry(value)
        except ShapeMismatchError as err:
            raise GraphQLError('{} cannot represent value: {}'.format(kind.variant, err)) from err
    raise GraphQLError('{} cannot represent value: {!r}'.format(kind.variant, value))


def serialize_point(value):
    point = _output_shape(Point, value)
    return [point.x, point.y]


def serialize_polygon(value):
    polygon = _output_shape(Polygon, value)
    return [[x, y] for x, y in polygon.exterior]


def _parser(kind):
    def parse_value(value):
        if not isinstance(value, str):
            raise UnsupportedInputError('parsing not implemented for this input (only string)')
        return kind.from_geometry(parse_geojson(value))

    def parse_literal(value_node, _variables=None):
        if not isinstance(value_node, StringValueNode):
            raise UnsupportedInputError('parsing not implemented for this input (only string)')
        return parse_value(value_node.value)

    return parse_value, parse_literal


parse_point_value, parse_point_literal = _parser(Point)
parse_polygon_value, parse_polygon_literal = _parser(Polygon)


PointScalar = GraphQLScalarType(
    name='Point',
    description='A point, output as [x, y] and input as a GeoJSON string.',
    serialize=serialize_point,
    parse_value=parse_point_value,
    parse_literal=parse_point_literal,
)

PolygonScalar = GraphQLScalarType(
    name='Polygon',
    description='A polygon, output as the [x, y] pairs of its exterior ring '
                'and input as a GeoJSON string.',
    serialize=serialize_polygon,
    parse_value=parse_polygon_value,
    parse_literal=parse_polygon_literal,
)
