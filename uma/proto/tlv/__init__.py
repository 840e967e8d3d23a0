from .codeable import (
    ByteCodeable, ByteCodeableType, TlvCodeable, TlvCodeableType, TlvField,
    TlvRecord
)
from .errors import (
    MalformedFieldError, MissingMandatoryFieldError, OversizedValueError,
    RecursionLimitExceededError, TlvError, UnrecognizedVariantError
)
from .fundamental_types import FieldType, IntegerType, fundamental_types
from .fundamental_types import byte, u16, u32, u64, boolean, utf8, raw  # type: ignore
from .stream import (
    iter_fields, length_offset, read_field, value_offset, write_field
)

__all__ = [
    "TlvCodeable",
    "ByteCodeable",
    "TlvCodeableType",
    "ByteCodeableType",
    "TlvField",
    "TlvRecord",
    "FieldType",
    "IntegerType",
    "fundamental_types",
    "write_field",
    "read_field",
    "iter_fields",
    "length_offset",
    "value_offset",

    # errors
    "TlvError",
    "MalformedFieldError",
    "OversizedValueError",
    "UnrecognizedVariantError",
    "MissingMandatoryFieldError",
    "RecursionLimitExceededError",

    # fundamental_types
    'byte',
    'u16',
    'u32',
    'u64',
    'boolean',
    'utf8',
    'raw',
]
