"""secp256k1 signatures and ECIES encryption.

Signatures are DER encoded ECDSA over the SHA256 of the message. Encryption
follows the common secp256k1 ECIES construction: an ephemeral key, HKDF over
the ephemeral and shared points, and AES-256-GCM with a 16 byte nonce. The
ciphertext is laid out as

    ephemeral_pubkey (65) || nonce (16) || tag (16) || encrypted

"""
from cryptography.exceptions import InvalidTag
from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.hkdf import HKDF
from hashlib import sha256
import coincurve
import os


UNCOMPRESSED_PUBKEY_SIZE = 65
NONCE_SIZE = 16
TAG_SIZE = 16


class CryptoError(ValueError):
    pass


class PrivateKey(object):
    def __init__(self, rawkey) -> None:
        if not isinstance(rawkey, bytes):
            raise TypeError(f"rawkey must be bytes, {type(rawkey)} received")
        elif len(rawkey) != 32:
            raise CryptoError(f"rawkey must be 32-byte long. {len(rawkey)} received")

        self.rawkey = rawkey
        try:
            self.key = coincurve.PrivateKey(rawkey)
        except ValueError as e:
            raise CryptoError("Invalid private key: {}".format(e))

    def to_bytes(self) -> bytes:
        return self.key.secret

    def public_key(self) -> 'PublicKey':
        return PublicKey(self.key.public_key)


class PublicKey(object):
    def __init__(self, innerkey):
        # We accept either 33 or 65 byte raw keys, or an EC PublicKey as
        # returned by coincurve
        if isinstance(innerkey, bytes):
            try:
                innerkey = coincurve.PublicKey(innerkey)
            except ValueError as e:
                raise CryptoError("Invalid public key: {}".format(e))

        elif not isinstance(innerkey, coincurve.keys.PublicKey):
            raise TypeError(
                "Key must either be bytes or coincurve.keys.PublicKey"
            )
        self.key = innerkey

    def serializeCompressed(self) -> bytes:
        return self.key.format(compressed=True)

    def serializeUncompressed(self) -> bytes:
        return self.key.format(compressed=False)

    def to_bytes(self) -> bytes:
        return self.serializeUncompressed()


class KeyPair(object):
    def __init__(self, public_key: bytes, private_key: bytes):
        self.public_key = public_key
        self.private_key = private_key


def hkdf(ikm, salt=None, info=None, length=32):
    hkdf = HKDF(
        algorithm=hashes.SHA256(),
        length=length,
        salt=salt,
        info=info,
        backend=default_backend())

    return hkdf.derive(ikm)


def generate_keypair() -> KeyPair:
    priv = PrivateKey(os.urandom(32))
    return KeyPair(
        public_key=priv.public_key().serializeUncompressed(),
        private_key=priv.to_bytes(),
    )


def sign_ecdsa(message: bytes, private_key: bytes) -> bytes:
    key = PrivateKey(private_key)
    return key.key.sign(message, hasher=lambda m: sha256(m).digest())


def verify_ecdsa(message: bytes, signature: bytes, public_key: bytes) -> bool:
    key = PublicKey(public_key)
    try:
        return key.key.verify(signature, message, hasher=lambda m: sha256(m).digest())
    except ValueError as e:
        # coincurve refuses to even parse malformed DER
        raise CryptoError("Invalid signature: {}".format(e))


def _shared_key(ephemeral: bytes, shared_point: bytes) -> bytes:
    return hkdf(ephemeral + shared_point)


def encrypt_ecies(message: bytes, public_key: bytes) -> bytes:
    receiver = PublicKey(public_key)
    ephemeral = PrivateKey(os.urandom(32))
    ephemeral_pub = ephemeral.public_key().serializeUncompressed()
    shared = receiver.key.multiply(ephemeral.to_bytes()).format(compressed=False)

    nonce = os.urandom(NONCE_SIZE)
    sealed = AESGCM(_shared_key(ephemeral_pub, shared)).encrypt(nonce, message, None)
    # AESGCM appends the tag, we carry it in front of the ciphertext.
    encrypted, tag = sealed[:-TAG_SIZE], sealed[-TAG_SIZE:]
    return ephemeral_pub + nonce + tag + encrypted


def decrypt_ecies(ciphertext: bytes, private_key: bytes) -> bytes:
    if len(ciphertext) < UNCOMPRESSED_PUBKEY_SIZE + NONCE_SIZE + TAG_SIZE:
        raise CryptoError("Ciphertext too short: {} bytes".format(len(ciphertext)))

    key = PrivateKey(private_key)
    ephemeral_pub = ciphertext[:UNCOMPRESSED_PUBKEY_SIZE]
    rest = ciphertext[UNCOMPRESSED_PUBKEY_SIZE:]
    nonce, tag, encrypted = rest[:NONCE_SIZE], rest[NONCE_SIZE:NONCE_SIZE + TAG_SIZE], rest[NONCE_SIZE + TAG_SIZE:]

    ephemeral = PublicKey(ephemeral_pub)
    shared = ephemeral.key.multiply(key.to_bytes()).format(compressed=False)
    try:
        return AESGCM(_shared_key(ephemeral_pub, shared)).decrypt(nonce, encrypted + tag, None)
    except InvalidTag:
        raise CryptoError("Unable to decrypt: authentication failed")
