import json

from ..constants import DEFAULT_DIMS, DEFAULT_SRID
from .ewkb import encode, decode, read_ewkb, read_srid, read_type
from .geojson import parse_geojson, project
from .geometry import Geometry


def register_funcs(conn, dims=DEFAULT_DIMS, srid=DEFAULT_SRID):
    # see: https://postgis.net/docs/reference.html
    # every function passes NULL through

    # constructors
    conn.create_function('st_Point', 2, lambda x,y: encode(Geometry('Point', (x, y)), dims, srid) if x is not None and y is not None else None )
    conn.create_function('st_GeomFromGeoJSON', 1, lambda geojstr: encode(parse_geojson(geojstr), dims, srid) if geojstr is not None else None )
    conn.create_function('st_GeomFromText', 1, lambda wkt: encode(Geometry.from_wkt(wkt), dims, srid) if wkt is not None else None )

    # representation
    conn.create_function('st_AsGeoJSON', 1, lambda wkb: json.dumps(project(decode(wkb))) if wkb is not None else None )
    conn.create_function('st_AsText', 1, lambda wkb: decode(wkb).wkt if wkb is not None else None )
    conn.create_function('st_AsEWKB', 1, lambda wkb: _reencode(wkb, dims) if wkb is not None else None )

    # header only
    conn.create_function('st_GeometryType', 1, lambda wkb: 'ST_' + read_type(wkb) if wkb is not None else None )
    conn.create_function('st_SRID', 1, lambda wkb: (read_srid(wkb) or 0) if wkb is not None else None )

    conn.create_function('st_SetSRID', 2, lambda wkb,newsrid: encode(decode(wkb), dims, newsrid) if wkb is not None else None )


def _reencode(wkb, dims):
    # keeps the srid, normalizes byte order and dimensions
    geom, srid = read_ewkb(wkb)
    return encode(geom, dims, srid)
