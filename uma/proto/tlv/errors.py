from typing import List


class TlvError(ValueError):
    """Base class for all errors raised while encoding or decoding TLV.
    """


class MalformedFieldError(TlvError):
    """A field's declared length runs past the end of the buffer, or its
    value cannot be interpreted as the field's type."""


class OversizedValueError(TlvError):
    """A value's encoding does not fit in a single length byte."""
    def __init__(self, tag: int, length: int):
        super().__init__(
            "Value for tag {} is {} bytes long, at most 255 are "
            "supported".format(tag, length)
        )
        self.tag = tag
        self.length = length


class UnrecognizedVariantError(TlvError):
    """An enumerated value carries a discriminant we don't know about."""


class MissingMandatoryFieldError(TlvError):
    def __init__(self, record: str, fields: List[str]):
        super().__init__(
            "{}: missing mandatory fields: {}".format(record, ', '.join(fields))
        )
        self.record = record
        self.fields = fields


class RecursionLimitExceededError(TlvError):
    """Nested composites are deeper than we are willing to parse."""
