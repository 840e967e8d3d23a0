from .errors import MissingMandatoryFieldError, RecursionLimitExceededError
from .fundamental_types import FieldType
from .stream import check_length, iter_fields, write_field
from ..config import MAX_NESTING_DEPTH
from io import BufferedIOBase, BytesIO
from typing import Any, Dict, Iterable, List, Optional, Tuple, Type, cast
import logging

logger = logging.getLogger(__name__)


class TlvCodeable(object):
    """Something that can be turned into a complete TLV record and back.

Such types can be embedded as the value of a field in another record,
giving nested TLV-within-TLV.

    """
    def to_tlv(self) -> bytes:
        raise NotImplementedError()

    @classmethod
    def from_tlv(cls, b: bytes, depth: int = 0) -> Any:
        raise NotImplementedError()


class ByteCodeable(object):
    """Something with a compact byte representation that isn't itself a TLV
record, such as an enumerated status or a set of option flags.

Unlike TLV records, decoding never skips anything: a value that cannot be
interpreted is an error.

    """
    def to_bytes(self) -> bytes:
        raise NotImplementedError()

    @classmethod
    def from_bytes(cls, b: bytes) -> Any:
        raise NotImplementedError()


class TlvCodeableType(FieldType):
    """A field whose value is a nested TLV record"""
    def __init__(self, name: str, codeable: Type[TlvCodeable]):
        super().__init__(name)
        self.codeable = codeable

    def write(self, io_out: BufferedIOBase, v: TlvCodeable) -> None:
        assert isinstance(v, self.codeable), \
            "{}: expected {}, got {}".format(self.name, self.codeable.__name__, type(v))
        io_out.write(v.to_tlv())

    def read(self, buf: bytes, offset: int, length: int, depth: int) -> TlvCodeable:
        return self.codeable.from_tlv(bytes(buf[offset:offset + length]), depth + 1)


class ByteCodeableType(FieldType):
    """A field whose value is a `ByteCodeable`"""
    def __init__(self, name: str, codeable: Type[ByteCodeable]):
        super().__init__(name)
        self.codeable = codeable

    def write(self, io_out: BufferedIOBase, v: ByteCodeable) -> None:
        assert isinstance(v, self.codeable), \
            "{}: expected {}, got {}".format(self.name, self.codeable.__name__, type(v))
        io_out.write(v.to_bytes())

    def read(self, buf: bytes, offset: int, length: int, depth: int) -> ByteCodeable:
        return self.codeable.from_bytes(bytes(buf[offset:offset + length]))


class TlvField(object):
    """A field within a particular record type"""
    def __init__(self, number: int, name: str, fieldtype: FieldType, mandatory: bool = True):
        self.number = number
        self.name = name
        self.fieldtype = fieldtype
        self.mandatory = mandatory

    def __repr__(self):
        return "TlvField[{self.number}={self.name},{self.fieldtype}]".format(self=self)


class TlvRecord(TlvCodeable):
    """A record with a fixed, class-level table of fields.

    Subclasses list their fields in `tlv_fields` and accept every field name
    as a keyword argument to `__init__`, with optional fields defaulting to
    `None`. Fields are always written in ascending tag order, so the encoding
    of a record only depends on its values.

    """
    tlv_fields: List[TlvField] = []

    @classmethod
    def find_field_by_number(cls, num: int) -> Optional[TlvField]:
        for f in cls.tlv_fields:
            if f.number == num:
                return f
        return None

    def _encode_fields(self, fields: Iterable[TlvField]) -> bytes:
        ordered: List[Tuple[int, bytes]] = []
        missing: List[str] = []
        for f in sorted(fields, key=lambda f: f.number):
            val = getattr(self, f.name)
            if val is None:
                if f.mandatory:
                    missing.append(f.name)
                continue
            binval = f.fieldtype.to_bytes(val)
            # Fail before anything gets written, we never hand out a
            # partial encoding.
            check_length(f.number, binval)
            ordered.append((f.number, binval))

        if missing:
            raise MissingMandatoryFieldError(type(self).__name__, missing)

        buf = BytesIO()
        for typenum, binval in ordered:
            write_field(cast(BufferedIOBase, buf), typenum, binval)

        return buf.getvalue()

    def to_tlv(self) -> bytes:
        return self._encode_fields(self.tlv_fields)

    @classmethod
    def from_tlv(cls, b: bytes, depth: int = 0) -> Any:
        if depth > MAX_NESTING_DEPTH:
            raise RecursionLimitExceededError(
                "{}: nesting depth {} exceeds {}".format(cls.__name__, depth, MAX_NESTING_DEPTH)
            )

        vals: Dict[str, Any] = {}
        for tag, start, length in iter_fields(b):
            f = cls.find_field_by_number(tag)
            if f is None:
                # Newer peers may add fields we don't know about, they just
                # get skipped.
                logger.debug("%s: skipping unknown tag %d (%d bytes)",
                             cls.__name__, tag, length)
                continue
            if f.name in vals:
                logger.debug("%s: duplicate tag %d, keeping the last one",
                             cls.__name__, tag)
            vals[f.name] = f.fieldtype.read(b, start, length, depth)

        missing = [f.name for f in cls.tlv_fields
                   if f.mandatory and f.name not in vals]
        if missing:
            raise MissingMandatoryFieldError(cls.__name__, missing)

        return cls(**vals)

    def to_py(self) -> Dict[str, Any]:
        """Field values by name, absent optional fields included as None"""
        return {f.name: getattr(self, f.name) for f in self.tlv_fields}

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return False
        return self.to_py() == cast(TlvRecord, other).to_py()

    def __repr__(self):
        return "{}[{}]".format(
            type(self).__name__,
            ", ".join(["{}={!r}".format(k, v) for k, v in self.to_py().items()])
        )
