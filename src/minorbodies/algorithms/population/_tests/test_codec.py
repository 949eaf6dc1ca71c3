import io

import numpy as np
import pytest
from numpy.lib import format as npy_format

from minorbodies.algorithms.population import AsteroidGroup
from minorbodies.errors import BlobDecodeError, PreconditionViolation


def _records(*arrays):
    buffer = io.BytesIO()
    for array in arrays:
        npy_format.write_array(buffer, array, allow_pickle=False)
    return buffer.getvalue()


def _assert_bit_identical(a, b):
    assert a.count == b.count
    for name in a.column_names:
        left, right = a.column(name), b.column(name)
        if left.dtype == object:
            assert list(left) == list(right)
        else:
            assert left.dtype == right.dtype
            assert left.tobytes() == right.tobytes()


def test_round_trip_orbiting(registry, orbiting, fill_orbiting):
    fill_orbiting(orbiting, 40)
    blob = orbiting.serialize()

    copy = AsteroidGroup(registry, "Sun", "copy")
    assert copy.deserialize(blob) == 40
    _assert_bit_identical(orbiting, copy)


def test_round_trip_co_orbital(registry, co_orbital, fill_co_orbital):
    fill_co_orbital(co_orbital, 40)
    blob = co_orbital.serialize()

    copy = AsteroidGroup(registry, "Sun", "copy", is_co_orbital=True, co_orbital_point="L4")
    copy.deserialize(blob)
    _assert_bit_identical(co_orbital, copy)


def test_round_trip_preserves_non_finite_values(registry, orbiting):
    orbiting.expand_capacity(2)
    orbiting.append_orbiting("nan", np.nan, (np.nan, np.inf, -np.inf, 0, 0, 0, 0))
    orbiting.append_orbiting("ünïcode name", -0.0, np.arange(7))

    copy = AsteroidGroup(registry, "Sun", "copy")
    copy.deserialize(orbiting.serialize())
    _assert_bit_identical(orbiting, copy)
    assert copy.names[1] == "ünïcode name"


def test_names_with_nul_are_rejected(orbiting):
    orbiting.expand_capacity(2)
    with pytest.raises(PreconditionViolation):
        orbiting.append_orbiting("2004 MN4\x00", 19.7, np.ones(7))
    assert orbiting.count == 0

    orbiting.append_orbiting("2004 MN4", 19.7, np.ones(7))
    assert orbiting.count == 1


def test_round_trip_of_empty_group(registry, orbiting):
    copy = AsteroidGroup(registry, "Sun", "copy")
    assert copy.deserialize(orbiting.serialize()) == 0
    assert copy.count == 0


def test_serialize_does_not_mutate(orbiting, fill_orbiting):
    fill_orbiting(orbiting, 3)
    orbiting.expand_capacity(5)
    first = orbiting.serialize()
    assert orbiting.count == 3
    assert orbiting.capacity == 8
    assert orbiting.serialize() == first


def test_serialize_ignores_reserved_rows(registry, orbiting, fill_orbiting):
    fill_orbiting(orbiting, 3)
    orbiting.expand_capacity(100)
    copy = AsteroidGroup(registry, "Sun", "copy")
    assert copy.deserialize(orbiting.serialize()) == 3


def test_incremental_loads_append(registry, fill_orbiting):
    first = AsteroidGroup(registry, "Sun", "part 1")
    second = AsteroidGroup(registry, "Sun", "part 2")
    raw_1 = fill_orbiting(first, 4, seed=1)
    raw_2 = fill_orbiting(second, 6, seed=2)

    merged = AsteroidGroup(registry, "Sun", "merged")
    merged.deserialize(first.serialize())
    merged.deserialize(second.serialize())

    assert merged.count == 10
    assert {len(merged.column(name)) for name in merged.column_names} == {10}
    expected = np.vstack([raw_1, raw_2])[:, :3].astype(np.float32)
    np.testing.assert_array_equal(merged.elements_3, expected)
    assert list(merged.names[:4]) == list(first.names)


def test_load_into_pre_expanded_capacity(registry, orbiting, fill_orbiting):
    fill_orbiting(orbiting, 5)
    target = AsteroidGroup(registry, "Sun", "target")
    target.expand_capacity(50)
    target.deserialize(orbiting.serialize())
    assert target.count == 5
    assert target.capacity == 50


def test_layout_mismatch_is_a_decode_error(orbiting, co_orbital, fill_orbiting, fill_co_orbital):
    fill_orbiting(orbiting, 3)
    fill_co_orbital(co_orbital, 3)
    orbiting_blob = orbiting.serialize()
    co_orbital_blob = co_orbital.serialize()

    with pytest.raises(BlobDecodeError):
        co_orbital.deserialize(orbiting_blob)
    with pytest.raises(BlobDecodeError):
        orbiting.deserialize(co_orbital_blob)

    assert orbiting.count == co_orbital.count == 3


@pytest.mark.parametrize("blob", [b"", b"not a numpy record"])
def test_garbage_is_a_decode_error(orbiting, blob):
    with pytest.raises(BlobDecodeError):
        orbiting.deserialize(blob)
    assert orbiting.count == 0


def test_non_bytes_is_a_decode_error(orbiting):
    with pytest.raises(BlobDecodeError):
        orbiting.deserialize("names,catalog_numbers")


def test_truncated_blob_leaves_group_unchanged(registry, orbiting, fill_orbiting):
    fill_orbiting(orbiting, 10)
    blob = orbiting.serialize()

    target = AsteroidGroup(registry, "Sun", "target")
    fill_orbiting(target, 2, seed=9)
    before = {name: target.column(name).copy() for name in target.column_names}

    with pytest.raises(BlobDecodeError):
        target.deserialize(blob[:-17])

    assert target.count == 2
    for name, column in before.items():
        np.testing.assert_array_equal(target.column(name), column)


def test_unequal_column_lengths_are_rejected(orbiting):
    blob = _records(
        np.array(["a", "b"]),
        np.array([1, 2], dtype=np.int32),
        np.array([1.0, 2.0], dtype=np.float32),
        np.zeros((2, 3), dtype=np.float32),
        np.zeros((2, 3), dtype=np.float32),
        np.zeros((3, 4), dtype=np.float32),
    )
    with pytest.raises(BlobDecodeError):
        orbiting.deserialize(blob)
    assert orbiting.count == 0


def test_wrong_dtype_or_width_is_rejected(orbiting):
    good = [
        np.array(["a"]),
        np.array([1], dtype=np.int32),
        np.array([1.0], dtype=np.float32),
        np.zeros((1, 3), dtype=np.float32),
        np.zeros((1, 3), dtype=np.float32),
        np.zeros((1, 4), dtype=np.float32),
    ]
    assert orbiting.deserialize(_records(*good)) == 1

    wrong_dtype = list(good)
    wrong_dtype[2] = np.array([1.0], dtype=np.float64)
    with pytest.raises(BlobDecodeError):
        orbiting.deserialize(_records(*wrong_dtype))

    wrong_width = list(good)
    wrong_width[5] = np.zeros((1, 3), dtype=np.float32)
    with pytest.raises(BlobDecodeError):
        orbiting.deserialize(_records(*wrong_width))

    numeric_names = list(good)
    numeric_names[0] = np.array([7], dtype=np.int32)
    with pytest.raises(BlobDecodeError):
        orbiting.deserialize(_records(*numeric_names))

    assert orbiting.count == 1


def test_big_endian_records_decode_exactly(orbiting):
    values = np.array([1.25, -3.5], dtype=">f4")
    blob = _records(
        np.array(["a", "b"]),
        np.array([1, 2], dtype=">i4"),
        values,
        np.zeros((2, 3), dtype=np.float32),
        np.zeros((2, 3), dtype=np.float32),
        np.zeros((2, 4), dtype=np.float32),
    )
    orbiting.deserialize(blob)
    assert orbiting.magnitudes.dtype == np.float32
    np.testing.assert_array_equal(orbiting.magnitudes, [1.25, -3.5])
    np.testing.assert_array_equal(orbiting.catalog_numbers, [1, 2])


def test_bulk_loads_grow_capacity_geometrically(registry, fill_orbiting):
    source = AsteroidGroup(registry, "Sun", "source")
    fill_orbiting(source, 10)
    blob = source.serialize()

    target = AsteroidGroup(registry, "Sun", "target")
    growths = 0
    for _ in range(64):
        before = target.capacity
        target.deserialize(blob)
        growths += target.capacity != before

    assert target.count == 640
    assert target.capacity >= target.count
    assert growths <= 7
