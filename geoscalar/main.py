import logging
import sqlite3

from .constants import DEFAULT_DIMS, DEFAULT_SRID
from .geometry import functions, serialize

logger = logging.getLogger(__name__)


def register(conn, dims=DEFAULT_DIMS, srid=DEFAULT_SRID):
    """Set up an existing sqlite3 connection for geometry columns.

    Registers the column adapters and converters (see serialize.register_types)
    and the st_* SQL functions on conn. Geometries are written as EWKB with the
    given dims, and srid embedded when not None. Converters only apply when the
    connection was opened with detect_types.

    The SQL functions belong to conn alone, but the adapters and converters
    are process wide: the last call decides how geometry parameters are bound
    on every connection.
    """
    sqlite3.enable_callback_tracebacks(True)

    serialize.register_types(dims=dims, srid=srid)
    functions.register_funcs(conn, dims=dims, srid=srid)
    logger.debug('registered geometry functions on %r (dims=%s, srid=%s)', conn, dims, srid)

    return conn
