from struct import unpack, pack, calcsize, error as StructError
from io import BytesIO

from ..constants import (wkbtype_to_shptype, shptype_to_wkbtype,
                         EWKB_Z_FLAG, EWKB_M_FLAG, EWKB_SRID_FLAG, EWKB_FLAGS,
                         WKB_NDR, WKB_XDR, DIMENSIONS, DEFAULT_DIMS)
from ..errors import MalformedWKBError, UnexpectedNullError, EncodingError
from .geometry import Geometry

__all__ = [
    'read_ewkb',
    'write_ewkb',
    'read_srid',
    'read_type',
    'encode',
    'decode',
]

INT32_MIN = -2 ** 31
INT32_MAX = 2 ** 31 - 1

# deepest collection nesting read before giving up
MAX_NESTING = 100

# member type each multi geometry must hold
_multi_members = {'MultiPoint': 'Point',
                  'MultiLineString': 'LineString',
                  'MultiPolygon': 'Polygon'}


def _as_bytes(wkb):
    if isinstance(wkb, str):
        # hex text, as postgis prints geometry columns
        try:
            return bytes.fromhex(wkb)
        except ValueError as err:
            raise MalformedWKBError('invalid hex EWKB: {}'.format(err)) from err
    if isinstance(wkb, (bytes, bytearray, memoryview)):
        return bytes(wkb)
    raise MalformedWKBError('expected EWKB bytes or hex text, got {}'.format(type(wkb).__name__))


def _unpack(stream, fmt):
    size = calcsize(fmt)
    data = stream.read(size)
    if len(data) < size:
        raise MalformedWKBError('truncated EWKB: expected {} more bytes at offset {}'.format(
            size, stream.tell() - len(data)))
    return unpack(fmt, data)


def _read_header(stream):
    """Read the byte order, type code and optional SRID of one geometry record.

    Returns (endian, shptype, ndims, srid) where srid is None when the record
    carries none.
    """
    # +---------------+-------------+------------------------------+
    # | endiannes     | byte        | 1:ndr/little endian          |
    # |               |             | 0:xdr/big endian             |
    # +---------------+-------------+------------------------------+
    (endian,) = _unpack(stream, '<B')
    if endian == WKB_XDR:
        endian = '>'
    elif endian == WKB_NDR:
        endian = '<'
    else:
        raise MalformedWKBError('invalid byte order marker: {}'.format(endian))

    # +---------------+-------------+------------------------------+
    # | type          | uint32      | base type 1-7, or'ed with    |
    # |               |             | 0x80000000 (has Z)           |
    # |               |             | 0x40000000 (has M)           |
    # |               |             | 0x20000000 (has SRID)        |
    # +---------------+-------------+------------------------------+
    # | srid          | int32       | only present with SRID flag  |
    # +---------------+-------------+------------------------------+
    (code,) = _unpack(stream, endian + 'I')
    has_z = bool(code & EWKB_Z_FLAG)
    has_m = bool(code & EWKB_M_FLAG)
    has_srid = bool(code & EWKB_SRID_FLAG)
    base = code & ~EWKB_FLAGS
    if base >= 1000:
        # iso wkb: 1000s are Z, 2000s are M, 3000s are ZM
        iso, base = divmod(base, 1000)
        if iso > 3:
            raise MalformedWKBError('unknown geometry type code: {}'.format(code))
        has_z = has_z or iso in (1, 3)
        has_m = has_m or iso in (2, 3)
    if base not in wkbtype_to_shptype:
        raise MalformedWKBError('unknown geometry type code: {}'.format(code))
    srid = None
    if has_srid:
        (srid,) = _unpack(stream, endian + 'i')
    return endian, wkbtype_to_shptype[base], 2 + has_z + has_m, srid


def _read_count(stream, endian, what):
    (num,) = _unpack(stream, endian + 'I')
    if num == 0:
        raise MalformedWKBError('empty {} cannot be decoded'.format(what))
    return num


def _read_positions(stream, endian, ndims):
    # +---------------+-------------+------------------------------+
    # | npoints       | uint32      | number of positions          |
    # +---------------+-------------+------------------------------+
    # | points        | float64 *   | x, y then z and/or m when    |
    # |               | ndims       | flagged, which are dropped   |
    # +---------------+-------------+------------------------------+
    num = _read_count(stream, endian, 'point sequence')
    flat = _unpack(stream, endian + '{}d'.format(num * ndims))
    return [flat[i:i + 2] for i in range(0, len(flat), ndims)]


def _read_rings(stream, endian, ndims):
    num = _read_count(stream, endian, 'polygon')
    return [_read_positions(stream, endian, ndims) for _ in range(num)]


def _read_members(stream, typ, endian, depth):
    if depth >= MAX_NESTING:
        raise MalformedWKBError('collections nested deeper than {} levels'.format(MAX_NESTING))
    num = _read_count(stream, endian, typ)
    members = []
    for _ in range(num):
        member, _srid = _read_geometry(stream, depth + 1)
        if typ in _multi_members and member.type != _multi_members[typ]:
            raise MalformedWKBError('{} cannot hold a {}'.format(typ, member.type))
        members.append(member)
    return members


def _read_geometry(stream, depth=0):
    endian, typ, ndims, srid = _read_header(stream)

    if typ == 'Point':
        x, y = _unpack(stream, endian + '{}d'.format(ndims))[:2]
        if x != x and y != y:
            # postgis writes empty points as NaN, NaN
            raise MalformedWKBError('empty point cannot be decoded')
        coords = (x, y)
    elif typ == 'LineString':
        coords = _read_positions(stream, endian, ndims)
    elif typ == 'Polygon':
        coords = _read_rings(stream, endian, ndims)
    else:
        members = _read_members(stream, typ, endian, depth)
        if typ == 'GeometryCollection':
            return Geometry(typ, geometries=members), srid
        coords = [m.coordinates for m in members]

    try:
        geom = Geometry(typ, coords)
    except ValueError as err:
        raise MalformedWKBError('invalid {} coordinates: {}'.format(typ, err)) from err
    return geom, srid


def read_ewkb(wkb):
    """Read an EWKB geometry.

    Accepts bytes, bytearray, memoryview (as sqlite hands out blobs) or hex
    text, in either byte order, with or without Z, M and SRID. Ordinates
    beyond x and y are dropped.

    :wkb: Binary geometry in (E)WKB format
    :returns: (Geometry, srid), srid being None when the header has none
    """
    stream = BytesIO(_as_bytes(wkb))
    try:
        geom, srid = _read_geometry(stream)
    except StructError as err:
        raise MalformedWKBError('invalid EWKB: {}'.format(err)) from err
    if stream.read(1):
        raise MalformedWKBError('trailing bytes after geometry at offset {}'.format(stream.tell() - 1))
    return geom, srid


def read_srid(wkb):
    '''the srid from the header only, None when there is none'''
    return _read_header(BytesIO(_as_bytes(wkb)))[3]


def read_type(wkb):
    '''the geometry type from the header only'''
    return _read_header(BytesIO(_as_bytes(wkb)))[1]


def _write_header(wkb, typ, flags, srid):
    code = shptype_to_wkbtype[typ] | flags
    if srid is not None:
        code |= EWKB_SRID_FLAG
    wkb += pack('<BI', WKB_NDR, code)
    if srid is not None:
        wkb += pack('<i', srid)


def _write_positions(wkb, positions, padding):
    flat = []
    for pos in positions:
        flat.extend(pos)
        flat.extend(padding)
    wkb += pack('<I{}d'.format(len(flat)), len(positions), *flat)


def _write_record(wkb, typ, coords, flags, padding, srid=None):
    _write_header(wkb, typ, flags, srid)
    if typ == 'Point':
        wkb += pack('<{}d'.format(2 + len(padding)), *(coords + padding))
    elif typ == 'LineString':
        _write_positions(wkb, coords, padding)
    elif typ == 'Polygon':
        wkb += pack('<I', len(coords))
        for ring in coords:
            _write_positions(wkb, ring, padding)
    else:
        # members never carry the srid
        member = _multi_members[typ]
        wkb += pack('<I', len(coords))
        for c in coords:
            _write_record(wkb, member, c, flags, padding)


def _write_geometry(wkb, geom, flags, padding, srid=None):
    if geom.type == 'GeometryCollection':
        _write_header(wkb, geom.type, flags, srid)
        wkb += pack('<I', len(geom.geometries))
        for member in geom.geometries:
            _write_geometry(wkb, member, flags, padding)
    else:
        _write_record(wkb, geom.type, geom.coordinates, flags, padding, srid)


def write_ewkb(geom, dims=DEFAULT_DIMS, srid=None):
    """Write a geometry to little endian EWKB.

    :geom: Geometry to write
    :dims: one of 'xy', 'xyz', 'xym', 'xyzm'; z and m are written as 0.0
    :srid: spatial reference id to embed in the header, or None to leave it out
    :returns: bytes
    """
    if not isinstance(geom, Geometry):
        raise EncodingError('cannot encode {} as EWKB'.format(type(geom).__name__))
    if dims not in DIMENSIONS:
        raise EncodingError('unsupported coordinate dimensions: {!r}'.format(dims))
    if srid is not None:
        if isinstance(srid, bool) or not isinstance(srid, int) or not INT32_MIN <= srid <= INT32_MAX:
            raise EncodingError('srid must be a 32-bit integer, got {!r}'.format(srid))

    flags = 0
    if 'z' in dims:
        flags |= EWKB_Z_FLAG
    if 'm' in dims:
        flags |= EWKB_M_FLAG
    padding = (0.0,) * (len(dims) - 2)

    wkb = bytearray()
    try:
        _write_geometry(wkb, geom, flags, padding, srid)
    except StructError as err:
        raise EncodingError('failed to write EWKB: {}'.format(err)) from err
    return bytes(wkb)


def encode(geom, dims=DEFAULT_DIMS, srid=None, hex=False):
    '''geometry to EWKB bytes, or upper case hex text with hex=True'''
    wkb = write_ewkb(geom, dims, srid)
    if hex:
        return wkb.hex().upper()
    return wkb


def decode(wkb, is_null=None):
    """EWKB to geometry.

    A null value is refused with UnexpectedNullError before the bytes are
    looked at. is_null defaults to whether wkb is None.
    """
    if is_null is None:
        is_null = wkb is None
    if is_null:
        raise UnexpectedNullError()
    geom, _srid = read_ewkb(wkb)
    if geom is None:
        raise RuntimeError('geometry parsing failed without error for non-null value')
    return geom
