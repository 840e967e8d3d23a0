"""Framing of single Tag-Length-Value fields.

Every field is a one byte tag, a one byte length and exactly `length` bytes
of value. Records are simply such fields packed back to back until the end
of the buffer, there is no record terminator or overall length prefix.

"""
from .errors import MalformedFieldError, OversizedValueError
from io import BufferedIOBase
from typing import Iterator, Tuple
import struct


MAX_TAG = 0xFF
MAX_LENGTH = 0xFF

# Size of the tag and length bytes preceding every value.
HEADER_SIZE = 2


def length_offset(offset: int) -> int:
    """Offset of the length byte of a field whose tag sits at `offset`"""
    return offset + 1


def value_offset(offset: int) -> int:
    """Offset of the first value byte of a field whose tag sits at `offset`"""
    return offset + HEADER_SIZE


def check_length(tag: int, value: bytes) -> None:
    if len(value) > MAX_LENGTH:
        raise OversizedValueError(tag, len(value))


def write_field(io_out: BufferedIOBase, tag: int, value: bytes) -> None:
    """Write a single field into `io_out`.

    A tag outside of 0-255 is a bug in the record layout, not something the
    remote side can provoke, so it's asserted rather than raised.
    """
    assert 0 <= tag <= MAX_TAG, "tag {} out of range".format(tag)
    check_length(tag, value)
    io_out.write(struct.pack("!BB", tag, len(value)))
    io_out.write(value)


def read_field(buf: bytes, offset: int) -> Tuple[int, int, int, int]:
    """Read the field whose tag sits at `offset`.

    Returns a tuple `(tag, length, value_start, next_offset)`. The value
    itself is `buf[value_start:next_offset]`, which is guaranteed to lie
    within `buf`.
    """
    if length_offset(offset) >= len(buf):
        raise MalformedFieldError(
            "Truncated field at offset {}: missing length byte".format(offset)
        )

    tag = buf[offset]
    length = buf[length_offset(offset)]
    start = value_offset(offset)
    end = start + length
    if end > len(buf):
        raise MalformedFieldError(
            "Field {} at offset {} declares {} bytes, only {} remaining".format(
                tag, offset, length, len(buf) - start)
        )
    return tag, length, start, end


def iter_fields(buf: bytes) -> Iterator[Tuple[int, int, int]]:
    """Walk all fields in `buf`, yielding `(tag, value_start, length)`.

    An empty buffer yields nothing.
    """
    offset = 0
    while offset < len(buf):
        tag, length, start, offset = read_field(buf, offset)
        yield tag, start, length
