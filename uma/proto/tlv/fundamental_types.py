import struct
from io import BufferedIOBase, BytesIO
import sys
from typing import Any, List, cast

from .errors import MalformedFieldError


class FieldType(object):
    """A (abstract) class representing the underlying type of a field.
These are further specialized.

    Every type knows how large the encoding of a value is going to be, how to
write it, and how to read it back given the exact span of bytes the TLV
framing assigned to it.

    """
    def __init__(self, name: str):
        self.name = name

    def size_of(self, v: Any) -> int:
        return len(self.to_bytes(v))

    def write(self, io_out: BufferedIOBase, v: Any) -> None:
        raise NotImplementedError()

    def read(self, buf: bytes, offset: int, length: int, depth: int) -> Any:
        """Read a value from `buf[offset:offset + length]`.

`depth` is the nesting level of the record being decoded, only composite
types care about it.

        """
        raise NotImplementedError()

    def to_bytes(self, v: Any) -> bytes:
        buf = BytesIO()
        self.write(cast(BufferedIOBase, buf), v)
        return buf.getvalue()

    def __str__(self):
        return self.name

    def __repr__(self):
        return 'FieldType({})'.format(self.name)


class IntegerType(FieldType):
    """Fixed width, unsigned, big-endian integers.

    The length byte is always emitted even though it's redundant, and a
    reader insists on it matching the width.
    """
    def __init__(self, name: str, bytelen: int, structfmt: str):
        super().__init__(name)
        self.bytelen = bytelen
        self.structfmt = structfmt

    def size_of(self, v: int) -> int:
        return self.bytelen

    def write(self, io_out: BufferedIOBase, v: int) -> None:
        if v < 0 or v >= (1 << (self.bytelen * 8)):
            raise ValueError('{} exceeds {} capacity'.format(v, self.name))
        io_out.write(struct.pack(self.structfmt, v))

    def read(self, buf: bytes, offset: int, length: int, depth: int) -> int:
        if length != self.bytelen:
            raise MalformedFieldError(
                '{}: expected {} bytes, got {}'.format(self.name, self.bytelen, length)
            )
        return struct.unpack_from(self.structfmt, buf, offset)[0]


class BooleanType(FieldType):
    def __init__(self, name: str):
        super().__init__(name)

    def size_of(self, v: bool) -> int:
        return 1

    def write(self, io_out: BufferedIOBase, v: bool) -> None:
        io_out.write(b'\x01' if v else b'\x00')

    def read(self, buf: bytes, offset: int, length: int, depth: int) -> bool:
        if length != 1:
            raise MalformedFieldError(
                '{}: expected 1 byte, got {}'.format(self.name, length)
            )
        # Anything nonzero counts as true, we only ever write 1 though.
        return buf[offset] != 0


class TextType(FieldType):
    """UTF-8 text, the length is the number of encoded bytes."""
    def size_of(self, v: str) -> int:
        return len(v.encode('UTF-8'))

    def write(self, io_out: BufferedIOBase, v: str) -> None:
        io_out.write(v.encode('UTF-8'))

    def read(self, buf: bytes, offset: int, length: int, depth: int) -> str:
        try:
            return bytes(buf[offset:offset + length]).decode('UTF-8')
        except UnicodeDecodeError as e:
            raise MalformedFieldError('{}: {}'.format(self.name, e))


class RawBytesType(FieldType):
    def size_of(self, v: bytes) -> int:
        return len(v)

    def write(self, io_out: BufferedIOBase, v: bytes) -> None:
        io_out.write(bytes(v))

    def read(self, buf: bytes, offset: int, length: int, depth: int) -> bytes:
        return bytes(buf[offset:offset + length])


def fundamental_types() -> List[FieldType]:
    # Integers are unsigned and big-endian. Ordinary counts are `u16`,
    # amounts and timestamps need the wider types.
    return [IntegerType('byte', 1, '>B'),
            IntegerType('u16', 2, '>H'),
            IntegerType('u32', 4, '>I'),
            IntegerType('u64', 8, '>Q'),
            BooleanType('boolean'),
            TextType('utf8'),
            RawBytesType('raw'),
            ]


# Expose these as native types.
mod = sys.modules[FieldType.__module__]
for m in fundamental_types():
    setattr(mod, m.name, m)
