from io import BytesIO
from uma.proto.tlv import (
    MalformedFieldError, OversizedValueError, iter_fields, length_offset,
    read_field, value_offset, write_field
)
import pytest


def test_offsets():
    assert length_offset(0) == 1
    assert value_offset(0) == 2
    assert length_offset(17) == 18
    assert value_offset(17) == 19


def test_write_field():
    buf = BytesIO()
    write_field(buf, 0, b'USD')
    write_field(buf, 255, b'')
    assert buf.getvalue() == bytes([0, 3]) + b'USD' + bytes([255, 0])


def test_write_field_oversized():
    buf = BytesIO()
    write_field(buf, 1, b'\x00' * 255)
    assert len(buf.getvalue()) == 257

    buf = BytesIO()
    with pytest.raises(OversizedValueError) as excinfo:
        write_field(buf, 1, b'\x00' * 256)
    assert excinfo.value.tag == 1
    assert excinfo.value.length == 256
    # Nothing got written.
    assert buf.getvalue() == b''


def test_write_field_bad_tag():
    with pytest.raises(AssertionError):
        write_field(BytesIO(), 256, b'')
    with pytest.raises(AssertionError):
        write_field(BytesIO(), -1, b'')


def test_read_field():
    b = bytes([3, 2, 0, 2, 7, 0])
    assert read_field(b, 0) == (3, 2, 2, 4)
    assert read_field(b, 4) == (7, 0, 6, 6)


def test_read_field_truncated():
    # Declares 10 bytes, only 3 remain.
    b = bytes([0, 1, 0x41, 5, 10]) + b'abc'
    assert read_field(b, 0) == (0, 1, 2, 3)
    with pytest.raises(MalformedFieldError):
        read_field(b, 3)

    # Tag byte, but no length byte.
    with pytest.raises(MalformedFieldError):
        read_field(bytes([0, 0, 4]), 2)


def test_iter_fields():
    assert list(iter_fields(b'')) == []

    b = bytes([0, 3]) + b'abc' + bytes([9, 0]) + bytes([1, 1, 0xff])
    assert list(iter_fields(b)) == [(0, 2, 3), (9, 7, 0), (1, 9, 1)]

    with pytest.raises(MalformedFieldError):
        list(iter_fields(b + bytes([4, 10, 1, 2, 3])))
