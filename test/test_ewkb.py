from struct import pack

import pytest
import shapely

from geoscalar import (Geometry, Polygon, encode, decode, read_ewkb, read_srid, read_type,
                       EncodingError, MalformedWKBError, UnexpectedNullError, XYZ, XYM, XYZM)


SQUARE = [(0.0, 0.0), (1.0, 1.0), (1.0, 0.0), (0.0, 0.0)]
HOLE = [(0.1, 0.1), (0.9, 0.9), (0.9, 0.1), (0.1, 0.1)]

POINT = Geometry('Point', (0.0, 1.0))
LINE = Geometry('LineString', [(0, 0), (1, 1), (2, 0.5)])
POLYGON = Geometry('Polygon', [SQUARE, HOLE])


GEOMETRIES = [
    POINT,
    LINE,
    POLYGON,
    Geometry('MultiPoint', [(0, 1), (-2.5, 1e-300)]),
    Geometry('MultiLineString', [[(0, 0), (1, 1)], [(5, 5), (6, 7), (8, 9)]]),
    Geometry('MultiPolygon', [[SQUARE, HOLE], [SQUARE]]),
    Geometry('GeometryCollection', geometries=[POINT, LINE, POLYGON]),
    # self-intersecting bowtie, accepted without validation
    Geometry('Polygon', [[(0, 0), (1, 1), (1, 0), (0, 1), (0, 0)]]),
]


@pytest.mark.parametrize('geom', GEOMETRIES, ids=lambda g: g.type)
def test_round_trip(geom):
    assert decode(encode(geom)) == geom
    assert decode(encode(geom, srid=4326)) == geom


def test_point_without_srid():
    wkb = encode(POINT)
    assert wkb == pack('<BIdd', 1, 1, 0.0, 1.0)
    geom = decode(wkb)
    assert geom.type == 'Point'
    assert geom.coordinates == (0.0, 1.0)


def test_point_with_srid():
    wkb = encode(POINT, srid=4326)
    assert wkb == pack('<BIidd', 1, 0x20000001, 4326, 0.0, 1.0)
    assert read_ewkb(wkb) == (POINT, 4326)


def test_polygon_with_hole():
    wkb = encode(POLYGON, srid=26910)
    polygon = Polygon.from_geometry(decode(wkb))
    assert len(polygon.interiors) == 1
    assert len(polygon.exterior) == 4
    assert polygon.interiors[0] == tuple(HOLE)


def test_full_float_precision():
    geom = Geometry('Point', (0.1 + 0.2, 1 / 3.0))
    assert decode(encode(geom)).coordinates == (0.1 + 0.2, 1 / 3.0)


def test_deterministic():
    assert encode(POLYGON, srid=3857) == encode(POLYGON, srid=3857)


@pytest.mark.parametrize('dims, flags, padding', [
    (XYZ, 0x80000000, (0.0,)),
    (XYM, 0x40000000, (0.0,)),
    (XYZM, 0xC0000000, (0.0, 0.0)),
])
def test_extra_dimensions(dims, flags, padding):
    wkb = encode(POINT, dims=dims)
    assert wkb == pack('<BI{}d'.format(2 + len(padding)), 1, 1 | flags, 0.0, 1.0, *padding)
    assert decode(wkb) == POINT


def test_extra_dimensions_on_members():
    geom = Geometry('MultiLineString', [[(0, 0), (1, 1)]])
    assert decode(encode(geom, dims=XYZ, srid=4326)) == geom


def test_hex():
    text = encode(POINT, hex=True)
    assert text == '0101000000' + '0' * 16 + '000000000000F03F'
    assert decode(text) == POINT
    assert decode(text.lower()) == POINT


def test_blob_types():
    wkb = encode(POLYGON)
    assert decode(memoryview(wkb)) == POLYGON
    assert decode(bytearray(wkb)) == POLYGON


def test_header_only_readers():
    assert read_srid(encode(POINT, srid=4326)) == 4326
    assert read_srid(encode(POINT)) is None
    assert read_type(encode(POLYGON)) == 'Polygon'


def test_big_endian():
    wkb = pack('>BIdd', 0, 1, 0.0, 1.0)
    assert decode(wkb) == POINT


def test_iso_wkb_z():
    wkb = pack('<BIddd', 1, 1001, 0.0, 1.0, 9.0)
    assert decode(wkb) == POINT


# shapely (GEOS) as an independent EWKB implementation

def test_matches_shapely_output():
    shp = shapely.Polygon(SQUARE, [HOLE])
    assert encode(POLYGON) == shapely.to_wkb(shp, byte_order=1, output_dimension=2)
    shp = shapely.set_srid(shapely.Point(0.0, 1.0), 4326)
    assert encode(POINT, srid=4326) == shapely.to_wkb(shp, byte_order=1, output_dimension=2,
                                                       include_srid=True)


def test_shapely_reads_our_output():
    shp = shapely.from_wkb(encode(POLYGON, srid=4326))
    assert shapely.get_srid(shp) == 4326
    assert Geometry.from_shapely(shp) == POLYGON


@pytest.mark.parametrize('byte_order', [0, 1])
def test_reads_shapely_output(byte_order):
    shp = shapely.MultiLineString([[(0, 0), (1, 1)], [(5, 5), (6, 7)]])
    geom = decode(shapely.to_wkb(shp, byte_order=byte_order))
    assert geom == Geometry('MultiLineString', [[(0, 0), (1, 1)], [(5, 5), (6, 7)]])


def test_reads_shapely_3d_output():
    shp = shapely.set_srid(shapely.LineString([(0, 1, 2), (3, 4, 5)]), 4326)
    wkb = shapely.to_wkb(shp, include_srid=True)
    assert read_ewkb(wkb) == (Geometry('LineString', [(0, 1), (3, 4)]), 4326)


# nulls

def test_null_is_refused():
    with pytest.raises(UnexpectedNullError):
        decode(None)


def test_null_flag_wins_over_bytes():
    with pytest.raises(UnexpectedNullError):
        decode(b'\x01\x02\x03 not even wkb', is_null=True)
    with pytest.raises(UnexpectedNullError):
        decode(encode(POINT), is_null=True)


def test_none_with_cleared_flag_is_malformed():
    with pytest.raises(MalformedWKBError):
        decode(None, is_null=False)


# malformed input

@pytest.mark.parametrize('wkb', [
    b'',
    b'\x01',
    b'\x02\x01\x00\x00\x00',
    pack('<BI', 1, 9),
    pack('<BIdd', 1, 1, 0.0, 1.0) + b'\x00',
    pack('<BId', 1, 1, 0.0),
    pack('<BII', 1, 2, 0),
    pack('<BII', 1, 3, 0),
    pack('<BIII', 1, 3, 1, 0),
    pack('<BII', 1, 5, 0),
    pack('<BII', 1, 7, 0),
    pack('<BIdd', 1, 1, float('nan'), float('nan')),
    pack('<BIIdddd', 1, 2, 2, 0.0, float('nan'), 1.0, 1.0),
    pack('<BII', 1, 4, 1) + pack('<BIIdddd', 1, 2, 2, 0.0, 0.0, 1.0, 1.0),
    'not hex',
    12,
], ids=[
    'empty', 'byte-order-only', 'bad-byte-order', 'unknown-type', 'trailing-bytes',
    'truncated-point', 'empty-linestring', 'empty-polygon', 'empty-ring',
    'empty-multilinestring', 'empty-collection', 'empty-point', 'nan-ordinate',
    'multipoint-of-lines', 'bad-hex', 'not-bytes',
])
def test_malformed(wkb):
    with pytest.raises(MalformedWKBError):
        decode(wkb)


def test_truncated_polygon():
    with pytest.raises(MalformedWKBError):
        decode(encode(POLYGON)[:-3])


def test_unknown_iso_dimensions():
    with pytest.raises(MalformedWKBError):
        decode(pack('<BIdd', 1, 4001, 0.0, 1.0))


def _nested_collections(depth):
    return b''.join(pack('<BII', 1, 7, 1) for _ in range(depth)) + pack('<BIdd', 1, 1, 0.0, 1.0)


def test_nested_collections():
    geom = decode(_nested_collections(50))
    for _ in range(50):
        assert geom.type == 'GeometryCollection'
        (geom,) = geom.geometries
    assert geom == POINT


def test_too_deeply_nested_collections():
    with pytest.raises(MalformedWKBError):
        decode(_nested_collections(3000))


# encoding failures

@pytest.mark.parametrize('kwargs', [
    {'dims': 'xyzq'},
    {'dims': 2},
    {'srid': '4326'},
    {'srid': 2 ** 40},
    {'srid': True},
])
def test_encoding_errors(kwargs):
    with pytest.raises(EncodingError):
        encode(POINT, **kwargs)


def test_encoding_non_geometry():
    with pytest.raises(EncodingError):
        encode((0.0, 1.0))
