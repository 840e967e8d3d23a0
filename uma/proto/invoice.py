from .bech32 import decode_bech32, encode_bech32
from .config import INVOICE_HRP
from .crypto import sign_ecdsa, verify_ecdsa
from .tlv import (
    ByteCodeable, ByteCodeableType, MalformedFieldError, TlvCodeableType,
    TlvField, TlvRecord, UnrecognizedVariantError, read_field
)
from .tlv import boolean, raw, u16, u32, u64, utf8  # type: ignore
from enum import Enum
from typing import Dict, Optional
import logging

logger = logging.getLogger(__name__)


class KycStatus(ByteCodeable, Enum):
    """KYC status of the receiving party.

    Encoded as a nested tag/length/value: the discriminant, the length of the
    raw status string and the string itself.
    """
    UNKNOWN = 0
    NOT_VERIFIED = 1
    PENDING = 2
    VERIFIED = 3

    @property
    def raw_value(self) -> str:
        return self.name

    def to_bytes(self) -> bytes:
        raw_value = self.raw_value.encode('UTF-8')
        return bytes([self.value, len(raw_value)]) + raw_value

    @classmethod
    def from_bytes(cls, b: bytes) -> 'KycStatus':
        tag, length, start, end = read_field(b, 0)
        if end != len(b):
            raise MalformedFieldError(
                "KycStatus: {} trailing bytes".format(len(b) - end)
            )
        try:
            status = cls(tag)
        except ValueError:
            raise UnrecognizedVariantError("Unknown KycStatus {}".format(tag))

        if b[start:end] != status.raw_value.encode('UTF-8'):
            raise UnrecognizedVariantError(
                "KycStatus {} does not match {!r}".format(tag, b[start:end])
            )
        return status

    @classmethod
    def from_raw_value(cls, raw_value: str) -> 'KycStatus':
        try:
            return cls[raw_value]
        except KeyError:
            raise UnrecognizedVariantError("Unknown KycStatus '{}'".format(raw_value))


class CounterPartyDataOption(object):
    def __init__(self, mandatory: bool):
        self.mandatory = mandatory

    def __eq__(self, other: object) -> bool:
        return isinstance(other, CounterPartyDataOption) and self.mandatory == other.mandatory

    def __repr__(self):
        return "CounterPartyDataOption(mandatory={})".format(self.mandatory)


class CounterPartyDataOptions(ByteCodeable):
    """The payer data a receiver asks the sender to provide.

    Serialized as `name:1,other:0`, where the flag tells whether the field is
    mandatory. Names are sorted so the encoding is canonical.
    """
    def __init__(self, options: Optional[Dict[str, CounterPartyDataOption]] = None):
        self.options = {} if options is None else dict(options)

    def get(self, key, default=None):
        return self.options.get(key, default)

    def __contains__(self, key):
        return key in self.options

    def __len__(self):
        return len(self.options)

    def to_bytes(self) -> bytes:
        parts = []
        for name in sorted(self.options):
            if not name or ':' in name or ',' in name:
                raise ValueError("Invalid payer data field name '{}'".format(name))
            parts.append("{}:{}".format(name, 1 if self.options[name].mandatory else 0))
        return ','.join(parts).encode('UTF-8')

    @classmethod
    def from_bytes(cls, b: bytes) -> 'CounterPartyDataOptions':
        try:
            s = b.decode('UTF-8')
        except UnicodeDecodeError as e:
            raise MalformedFieldError("CounterPartyDataOptions: {}".format(e))

        options: Dict[str, CounterPartyDataOption] = {}
        if s == '':
            return cls(options)

        for entry in s.split(','):
            parts = entry.split(':')
            if len(parts) != 2 or parts[0] == '':
                raise MalformedFieldError(
                    "CounterPartyDataOptions: bad entry '{}'".format(entry)
                )
            name, flag = parts
            if name in options:
                raise MalformedFieldError(
                    "CounterPartyDataOptions: duplicate entry '{}'".format(name)
                )
            if flag not in ('0', '1'):
                raise UnrecognizedVariantError(
                    "CounterPartyDataOptions: bad mandatory flag '{}' for {}".format(flag, name)
                )
            options[name] = CounterPartyDataOption(mandatory=flag == '1')
        return cls(options)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, CounterPartyDataOptions) and self.options == other.options

    def __repr__(self):
        return "CounterPartyDataOptions({!r})".format(self.options)


class InvoiceCurrency(TlvRecord):
    tlv_fields = [
        TlvField(0, 'code', utf8),
        TlvField(1, 'name', utf8),
        TlvField(2, 'symbol', utf8),
        TlvField(3, 'decimals', u16),
    ]

    def __init__(self, code: str, name: str, symbol: str, decimals: int):
        self.code = code
        self.name = name
        self.symbol = symbol
        self.decimals = decimals


# Detached signature, well clear of the tags used for the signed fields.
SIGNATURE_TAG = 100


class Invoice(TlvRecord):
    tlv_fields = [
        TlvField(0, 'receiver_uma', utf8),
        # Identifies the invoice and doubles as proof of payment.
        TlvField(1, 'invoice_uuid', utf8),
        # In the smallest unit of the receiving currency.
        TlvField(2, 'amount', u64),
        TlvField(3, 'receiving_currency', TlvCodeableType('invoice_currency', InvoiceCurrency)),
        # Unix timestamp.
        TlvField(4, 'expiration', u64),
        TlvField(5, 'is_subject_to_travel_rule', boolean),
        TlvField(6, 'required_payer_data',
                 ByteCodeableType('counter_party_data_options', CounterPartyDataOptions),
                 mandatory=False),
        # Lowest minor version of each supported major version, comma separated.
        TlvField(7, 'uma_version', utf8),
        TlvField(8, 'comment_chars_allowed', u16, mandatory=False),
        # If present the invoice goes straight to the sending VASP.
        TlvField(9, 'sender_uma', utf8, mandatory=False),
        # Maximum number of times the invoice can be paid.
        TlvField(10, 'invoice_limit', u32, mandatory=False),
        TlvField(11, 'kyc_status', ByteCodeableType('kyc_status', KycStatus), mandatory=False),
        TlvField(12, 'callback', utf8),
        TlvField(SIGNATURE_TAG, 'signature', raw, mandatory=False),
    ]

    def __init__(self,
                 receiver_uma: str,
                 invoice_uuid: str,
                 amount: int,
                 receiving_currency: InvoiceCurrency,
                 expiration: int,
                 is_subject_to_travel_rule: bool,
                 uma_version: str,
                 callback: str,
                 required_payer_data: Optional[CounterPartyDataOptions] = None,
                 comment_chars_allowed: Optional[int] = None,
                 sender_uma: Optional[str] = None,
                 invoice_limit: Optional[int] = None,
                 kyc_status: Optional[KycStatus] = None,
                 signature: Optional[bytes] = None):
        self.receiver_uma = receiver_uma
        self.invoice_uuid = invoice_uuid
        self.amount = amount
        self.receiving_currency = receiving_currency
        self.expiration = expiration
        self.is_subject_to_travel_rule = is_subject_to_travel_rule
        self.required_payer_data = required_payer_data
        self.uma_version = uma_version
        self.comment_chars_allowed = comment_chars_allowed
        self.sender_uma = sender_uma
        self.invoice_limit = invoice_limit
        self.kyc_status = kyc_status
        self.callback = callback
        self.signature = signature

    def signable_bytes(self) -> bytes:
        """The TLV encoding of everything but the signature.

        This is what gets signed, and what a verifier needs to reconstruct.
        """
        return self._encode_fields([f for f in self.tlv_fields
                                    if f.number != SIGNATURE_TAG])

    def with_signature(self, signature: Optional[bytes]) -> 'Invoice':
        vals = self.to_py()
        vals['signature'] = signature
        return Invoice(**vals)

    def sign(self, private_key: bytes) -> 'Invoice':
        """Return a copy of this invoice signed with `private_key`"""
        signature = sign_ecdsa(self.signable_bytes(), private_key)
        logger.debug("Signed invoice %s (%d byte signature)",
                     self.invoice_uuid, len(signature))
        return self.with_signature(signature)

    def verify_signature(self, public_key: bytes) -> bool:
        if self.signature is None:
            raise ValueError("Invoice {} is not signed".format(self.invoice_uuid))
        return verify_ecdsa(self.signable_bytes(), self.signature, public_key)

    def to_bech32(self) -> str:
        return encode_bech32(INVOICE_HRP, self.to_tlv())

    @classmethod
    def from_bech32(cls, bech: str) -> 'Invoice':
        decoded = decode_bech32(bech)
        if decoded.hrp != INVOICE_HRP:
            raise ValueError("Invoice must start with {}, not {}".format(INVOICE_HRP, decoded.hrp))
        return cls.from_tlv(decoded.data)

    def __str__(self):
        return "Invoice[{self.invoice_uuid}, amount={self.amount}{code}, receiver={self.receiver_uma}]".format(
            self=self, code=self.receiving_currency.code
        )
