from uma.proto.crypto import (
    CryptoError, PrivateKey, decrypt_ecies, encrypt_ecies, generate_keypair,
    sign_ecdsa, verify_ecdsa
)
import pytest


privkey = bytes.fromhex('c28a9f80738f770d527803a566cf6fc3edf6cea586c4fc4a5223a5ad797e1ac3')


def test_keypair():
    keys = generate_keypair()
    assert len(keys.private_key) == 32
    assert len(keys.public_key) == 65
    assert PrivateKey(keys.private_key).public_key().to_bytes() == keys.public_key


def test_sign_verify():
    pub = PrivateKey(privkey).public_key()
    sig = sign_ecdsa(b'hello', privkey)
    # Deterministic (RFC6979) DER signature
    assert sig == sign_ecdsa(b'hello', privkey)
    assert sig[0] == 0x30

    assert verify_ecdsa(b'hello', sig, pub.serializeUncompressed())
    assert verify_ecdsa(b'hello', sig, pub.serializeCompressed())
    assert not verify_ecdsa(b'hellO', sig, pub.serializeUncompressed())

    with pytest.raises(CryptoError):
        verify_ecdsa(b'hello', b'\x00' * 8, pub.serializeUncompressed())


def test_bad_keys():
    with pytest.raises(CryptoError):
        sign_ecdsa(b'hello', b'\x01' * 31)
    with pytest.raises(CryptoError):
        sign_ecdsa(b'hello', b'\x00' * 32)
    with pytest.raises(CryptoError):
        verify_ecdsa(b'hello', b'', b'\x04' + b'\x00' * 64)
    with pytest.raises(TypeError):
        PrivateKey('00' * 32)


def test_ecies():
    keys = generate_keypair()
    msg = b'Ten bucks for a quick quip'
    ciphertext = encrypt_ecies(msg, keys.public_key)
    assert len(ciphertext) == 65 + 16 + 16 + len(msg)
    assert decrypt_ecies(ciphertext, keys.private_key) == msg

    # Fresh ephemeral key and nonce every time
    assert encrypt_ecies(msg, keys.public_key) != ciphertext

    tampered = ciphertext[:-1] + bytes([ciphertext[-1] ^ 1])
    with pytest.raises(CryptoError):
        decrypt_ecies(tampered, keys.private_key)

    other = generate_keypair()
    with pytest.raises(CryptoError):
        decrypt_ecies(ciphertext, other.private_key)

    with pytest.raises(CryptoError):
        decrypt_ecies(ciphertext[:90], keys.private_key)
