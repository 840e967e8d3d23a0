# Copyright (c) 2017 Pieter Wuille
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in
# all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN
# THE SOFTWARE.

"""Bech32 encoding of arbitrary byte payloads.

Unlike segwit addresses there is no 90 character limit, invoices are
considerably longer than that.
"""
from typing import Tuple
import bitstring


CHARSET = "qpzry9x8gf2tvdw0s3jn54khce6mua7l"


class Bech32EncodeError(ValueError):
    pass


class Bech32DecodeError(ValueError):
    pass


class Bech32ChecksumError(Bech32DecodeError):
    pass


class Bech32CharsetError(Bech32DecodeError):
    pass


def bech32_polymod(values: bytes) -> int:
    """Internal function that computes the Bech32 checksum."""
    generator = [0x3b6a57b2, 0x26508e6d, 0x1ea119fa, 0x3d4233dd, 0x2a1462b3]
    chk = 1
    for value in values:
        top = chk >> 25
        chk = (chk & 0x1ffffff) << 5 ^ value
        for i in range(5):
            chk ^= generator[i] if ((top >> i) & 1) else 0
    return chk


def bech32_hrp_expand(hrp: str) -> bytes:
    """Expand the HRP into values for checksum computation."""
    return bytes([ord(x) >> 5 for x in hrp] + [0] + [ord(x) & 31 for x in hrp])


def bech32_verify_checksum(hrp: str, data: bytes) -> bool:
    """Verify a checksum given HRP and converted data characters."""
    return bech32_polymod(bech32_hrp_expand(hrp) + data) == 1


def bech32_create_checksum(hrp: str, data: bytes) -> bytes:
    """Compute the checksum values given HRP and data."""
    values = bech32_hrp_expand(hrp) + data
    polymod = bech32_polymod(values + bytes([0, 0, 0, 0, 0, 0])) ^ 1
    return bytes([(polymod >> 5 * (5 - i)) & 31 for i in range(6)])


def bech32_encode(hrp: str, data: bytes) -> str:
    """Compute a Bech32 string given HRP and data values."""
    combined = data + bech32_create_checksum(hrp, data)
    return hrp + '1' + ''.join([CHARSET[d] for d in combined])


def bech32_decode(bech: str) -> Tuple[str, bytes]:
    """Validate a Bech32 string, and determine HRP and data."""
    if ((any(ord(x) < 33 or ord(x) > 126 for x in bech)) or (bech.lower() != bech and bech.upper() != bech)):
        raise Bech32CharsetError("Not a bech32-encoded string: {}".format(bech))

    bech = bech.lower()
    pos = bech.rfind('1')
    if pos < 1 or pos + 7 > len(bech):
        raise Bech32DecodeError("Could not locate hrp separator '1' in {}".format(bech))

    if not all(x in CHARSET for x in bech[pos + 1:]):
        raise Bech32CharsetError("Non-bech32 character found in {}".format(bech))

    hrp = bech[:pos]
    data = bytes([CHARSET.find(x) for x in bech[pos + 1:]])
    if not bech32_verify_checksum(hrp, data):
        raise Bech32ChecksumError("Checksum verification failed for {}".format(bech))

    return (hrp, data[:-6])


# Bech32 spits out array of 5-bit values.  Shim here.
def u5_to_bitarray(arr: bytes) -> bitstring.BitArray:
    ret = bitstring.BitArray()
    for a in arr:
        ret += bitstring.pack("uint:5", a)
    return ret


def bitarray_to_u5(barr: bitstring.BitArray) -> bytes:
    assert len(barr) % 5 == 0
    ret = []
    s = bitstring.ConstBitStream(barr)
    while s.pos != len(s):
        ret.append(s.read(5).uint)
    return bytes(ret)


# Discard trailing bits, convert to bytes.
def trim_to_bytes(barr: bitstring.BitArray) -> bytes:
    # Adds a byte if necessary.
    b = barr.tobytes()
    if len(barr) % 8 != 0:
        return b[:-1]
    return b


class Bech32Data(object):
    """A decoded bech32 string: its human readable prefix and payload"""
    def __init__(self, hrp: str, data: bytes):
        self.hrp = hrp
        self.data = data

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Bech32Data):
            return False
        return self.hrp == other.hrp and self.data == other.data

    def __str__(self):
        return "Bech32Data[{self.hrp}, 0x{data}]".format(
            self=self, data=self.data.hex()
        )


def encode_bech32(hrp: str, data: bytes) -> str:
    """Encode an 8-bit payload under the given human readable prefix."""
    if len(hrp) == 0 or any(ord(x) < 33 or ord(x) > 126 for x in hrp):
        raise Bech32EncodeError("Invalid human readable prefix '{}'".format(hrp))
    if hrp.lower() != hrp:
        raise Bech32EncodeError("Human readable prefix must be lowercase: {}".format(hrp))

    barr = bitstring.BitArray(bytes(data))
    # Pad to a multiple of 5 bits with zeroes.
    while len(barr) % 5 != 0:
        barr.append('0b0')
    return bech32_encode(hrp, bitarray_to_u5(barr))


def decode_bech32(bech: str) -> Bech32Data:
    """Inverse of `encode_bech32`, padding bits are discarded."""
    hrp, data = bech32_decode(bech)
    return Bech32Data(hrp, trim_to_bytes(u5_to_bitarray(data)))
