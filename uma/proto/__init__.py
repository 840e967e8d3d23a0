from .bech32 import Bech32Data, decode_bech32, encode_bech32
from .crypto import (
    CryptoError, KeyPair, decrypt_ecies, encrypt_ecies, generate_keypair,
    sign_ecdsa, verify_ecdsa
)
from .invoice import (
    CounterPartyDataOption, CounterPartyDataOptions, Invoice, InvoiceCurrency,
    KycStatus
)

__version__ = "0.1.0"

__all__ = [
    "Invoice",
    "InvoiceCurrency",
    "KycStatus",
    "CounterPartyDataOption",
    "CounterPartyDataOptions",
    "Bech32Data",
    "encode_bech32",
    "decode_bech32",
    "KeyPair",
    "CryptoError",
    "generate_keypair",
    "sign_ecdsa",
    "verify_ecdsa",
    "encrypt_ecies",
    "decrypt_ecies",
    "__version__",
]
