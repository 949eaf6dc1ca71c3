"""
Binary persistence of a group's columns.

A blob is the group's columns, in layout order, written back to back as
NumPy ``.npy`` records. Each record carries its own dtype and shape, so no
further header is needed; all records of one blob have the same number of
rows. Pickled (object) records are never written or accepted: names travel
as fixed-width unicode arrays.
"""

import io

import numpy as np
from numpy.lib import format as npy_format

from minorbodies.errors import BlobDecodeError


def _is_text(spec):
    return spec.dtype == np.dtype(object)


def encode_columns(layout, columns, count):
    """
    Serialize the first `count` rows of `columns` as one blob.

    Parameters
    ----------
    layout : sequence of ColumnSpec
        Column table giving the record order
    columns : dict
        Column name -> array (at least `count` rows)
    count : int
        Number of populated rows

    Returns
    -------
    bytes
    """
    buffer = io.BytesIO()
    for spec in layout:
        data = columns[spec.name][:count]
        if _is_text(spec):
            data = np.array([str(name) for name in data], dtype=str)
        npy_format.write_array(buffer, np.ascontiguousarray(data), allow_pickle=False)
    return buffer.getvalue()


def _check_record(spec, record):
    if _is_text(spec):
        if record.dtype.kind != "U" or record.ndim != 1:
            raise BlobDecodeError(
                f"Column '{spec.name}' must be a 1-D unicode array, got {record.dtype} with shape {record.shape}"
            )
        return record.astype(object)

    if record.dtype.kind != spec.dtype.kind or record.dtype.itemsize != spec.dtype.itemsize:
        raise BlobDecodeError(f"Column '{spec.name}' must have dtype {spec.dtype}, got {record.dtype}")
    expected_ndim = 1 if spec.width == 0 else 2
    if record.ndim != expected_ndim or (spec.width and record.shape[1] != spec.width):
        raise BlobDecodeError(
            f"Column '{spec.name}' has shape {record.shape}, expected width {spec.width or 'scalar'}"
        )
    # Byte order may differ from the native one; the conversion is exact.
    return record.astype(spec.dtype, copy=False)


def decode_columns(layout, blob):
    """
    Decode and validate a blob against a column table.

    Nothing is written anywhere: the caller receives fully validated columns
    or a BlobDecodeError.

    Parameters
    ----------
    layout : sequence of ColumnSpec
        Expected column table
    blob : bytes-like
        Data produced by `encode_columns`

    Returns
    -------
    tuple
        (columns, rows) where `columns` maps column name -> array

    Raises
    ------
    BlobDecodeError
        If the blob is corrupt, has the wrong number of records, or a record
        does not match its column's dtype, width or the common row count
    """
    if not isinstance(blob, (bytes, bytearray, memoryview)):
        raise BlobDecodeError(f"Expected a bytes-like blob, got {type(blob).__name__}")

    data = bytes(blob)
    buffer = io.BytesIO(data)
    records = []
    while buffer.tell() < len(data):
        try:
            records.append(npy_format.read_array(buffer, allow_pickle=False))
        except (ValueError, EOFError, OSError) as e:
            raise BlobDecodeError(f"Record {len(records)} of blob is corrupt: {e}") from e

    if len(records) != len(layout):
        raise BlobDecodeError(f"Blob holds {len(records)} columns, layout expects {len(layout)}")

    columns = {}
    rows = None
    for spec, record in zip(layout, records):
        column = _check_record(spec, record)
        if rows is None:
            rows = column.shape[0]
        elif column.shape[0] != rows:
            raise BlobDecodeError(
                f"Column '{spec.name}' has {column.shape[0]} rows, previous columns have {rows}"
            )
        columns[spec.name] = column

    return columns, rows
