from uma.proto.bech32 import (
    Bech32CharsetError, Bech32ChecksumError, Bech32Data, Bech32DecodeError,
    Bech32EncodeError, bech32_decode, bitarray_to_u5, decode_bech32,
    encode_bech32, trim_to_bytes, u5_to_bitarray
)
import bitstring
import pytest


def test_bip173_vectors():
    valid = ['A12UEL5L',
             'a12uel5l',
             'abcdef1qpzry9x8gf2tvdw0s3jn54khce6mua7lmqqqxw',
             '?1ezyfcl']
    for s in valid:
        hrp, data = bech32_decode(s)
        assert hrp == s.lower()[:s.rfind('1')]


def test_roundtrip():
    for data in [b'', b'\x00', b'hello world', bytes(range(256))]:
        s = encode_bech32('uma', data)
        assert s.startswith('uma1')
        assert decode_bech32(s) == Bech32Data('uma', data)
        # Either case is fine, as long as it's consistent.
        assert decode_bech32(s.upper()) == Bech32Data('uma', data)


def test_roundtrip_padding():
    # Every payload length modulo 5 needs a different amount of padding on
    # the way in, and trimming on the way out.
    for n in range(1, 11):
        data = bytes(range(0xF0, 0xF0 + n))
        assert decode_bech32(encode_bech32('uma', data)).data == data


def test_u5_conversion():
    barr = bitstring.BitArray(b'\xff\x00')
    barr.append('0b0000')
    u5 = bitarray_to_u5(barr)
    assert u5 == bytes([31, 28, 0, 0])
    assert u5_to_bitarray(u5) == barr
    assert trim_to_bytes(u5_to_bitarray(u5)) == b'\xff\x00'
    assert trim_to_bytes(bitstring.BitArray(b'\xab')) == b'\xab'


def test_checksum_error():
    s = encode_bech32('uma', b'hello world')
    corrupted = s[:5] + ('q' if s[5] != 'q' else 'p') + s[6:]
    with pytest.raises(Bech32ChecksumError):
        decode_bech32(corrupted)


def test_charset_error():
    s = encode_bech32('uma', b'hello world')
    # 'b' is not part of the bech32 alphabet
    with pytest.raises(Bech32CharsetError):
        decode_bech32(s[:6] + 'b' + s[7:])
    # Mixed case
    i = [i for i in range(4, len(s)) if s[i].isalpha()][0]
    with pytest.raises(Bech32CharsetError):
        decode_bech32(s[:i] + s[i].upper() + s[i + 1:])
    with pytest.raises(Bech32CharsetError):
        decode_bech32('uma1 qqqqqqq')


def test_errors_are_distinct():
    assert not issubclass(Bech32ChecksumError, Bech32CharsetError)
    assert not issubclass(Bech32CharsetError, Bech32ChecksumError)

    with pytest.raises(Bech32DecodeError):
        decode_bech32('qqqqqqqqqq')


def test_encode_error():
    with pytest.raises(Bech32EncodeError):
        encode_bech32('', b'abc')
    with pytest.raises(Bech32EncodeError):
        encode_bech32('UMA', b'abc')
