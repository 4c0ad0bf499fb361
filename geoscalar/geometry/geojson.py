import json

from ..errors import ProjectionError, UnsupportedInputError
from .geometry import Geometry


def _sorted_object(pairs):
    return dict(sorted(pairs))


def to_geojson(geom):
    '''geometry to GeoJSON text'''
    try:
        return json.dumps(geom.__geo_interface__, allow_nan=False)
    except (AttributeError, TypeError, ValueError) as err:
        raise ProjectionError('failed to render GeoJSON: {}'.format(err)) from err


def project(geom):
    """Project a geometry to a GeoJSON-shaped dict.

    The geometry is rendered to GeoJSON text and read back, so the result
    only holds plain dicts, lists, floats and strings. Keys come out in
    ascending order at every level, e.g.

        {"coordinates": [0.0, 1.0], "type": "Point"}
    """
    text = to_geojson(geom)
    try:
        return json.loads(text, object_pairs_hook=_sorted_object)
    except ValueError as err:
        raise ProjectionError('failed to read back GeoJSON: {}'.format(err)) from err


def parse_geojson(text):
    """GeoJSON text to Geometry.

    Takes a geometry object or a Feature holding one. Coordinates are taken as
    they are, open rings and one point lines included, so this is the exact
    inverse of project. Anything that is not a string, or not GeoJSON, raises
    UnsupportedInputError.
    """
    if not isinstance(text, str):
        raise UnsupportedInputError('parsing not implemented for this input (only string)')
    try:
        obj = json.loads(text)
    except (ValueError, RecursionError) as err:
        raise UnsupportedInputError('failed to parse GeoJSON string') from err
    if isinstance(obj, dict) and obj.get('type') == 'Feature':
        obj = obj.get('geometry')
    if not isinstance(obj, dict):
        raise UnsupportedInputError('GeoJSON string does not hold a geometry')
    try:
        return Geometry.from_mapping(obj)
    except (AttributeError, TypeError, ValueError, RecursionError) as err:
        raise UnsupportedInputError('failed to parse GeoJSON string: {}'.format(err)) from err
