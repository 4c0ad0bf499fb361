"""Exceptions raised by the codec, the narrowing conversions and the adapters."""


class GeometryError(Exception):
    """Base class for every error raised by geoscalar."""


class UnexpectedNullError(GeometryError):
    """Decoding was asked to read a null column value."""

    def __init__(self, message='unexpected null; try decoding as an optional value'):
        super().__init__(message)


class MalformedWKBError(GeometryError, ValueError):
    """The bytes are not a valid (E)WKB geometry."""


class ShapeMismatchError(GeometryError, TypeError):
    """A geometry could not be narrowed to the requested shape."""

    def __init__(self, expected, actual):
        self.expected = expected
        self.actual = actual
        super().__init__('expected a {} geometry, got {}'.format(expected, actual))


class ProjectionError(GeometryError):
    """Rendering a geometry to GeoJSON, or reading that GeoJSON back, failed."""


class UnsupportedInputError(GeometryError, ValueError):
    """An adapter was given input it cannot parse."""


class EncodingError(GeometryError):
    """Writing a geometry to EWKB failed; the current call is aborted."""
