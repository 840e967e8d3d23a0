#! /usr/bin/python3
from uma.proto.tlv import MalformedFieldError, fundamental_types
from uma.proto.tlv import boolean, u16, u64, utf8  # type: ignore
import pytest


def test_fundamental_types():
    expect = {'byte': [[255, b'\xff'],
                       [0, b'\x00']],
              'u16': [[65535, b'\xff\xff'],
                      [2, b'\x00\x02'],
                      [0, b'\x00\x00']],
              'u32': [[4294967295, b'\xff\xff\xff\xff'],
                      [0, b'\x00\x00\x00\x00']],
              'u64': [[18446744073709551615,
                       b'\xff\xff\xff\xff\xff\xff\xff\xff'],
                      [1700000000, b'\x00\x00\x00\x00\x65\x53\xf1\x00'],
                      [0, b'\x00\x00\x00\x00\x00\x00\x00\x00']],
              'boolean': [[True, b'\x01'],
                          [False, b'\x00']],
              'utf8': [['USD', b'USD'],
                       ['', b''],
                       ['€', b'\xe2\x82\xac']],
              'raw': [[b'\x00\x01', b'\x00\x01'],
                      [b'', b'']],
              }

    untested = set()
    for t in fundamental_types():
        if t.name not in expect:
            untested.add(t.name)
            continue
        for v, b in expect[t.name]:
            assert t.to_bytes(v) == b
            assert t.size_of(v) == len(b)
            # Read from the middle of a larger buffer.
            buf = b'\xaa' + b + b'\xbb'
            assert t.read(buf, 1, len(b), 0) == v

    assert untested == set()


def test_text_length_is_bytes():
    # 4 characters, 10 bytes.
    s = 'a€ü😀'
    assert len(s) == 4
    assert utf8.size_of(s) == 10


def test_text_invalid_utf8():
    with pytest.raises(MalformedFieldError):
        utf8.read(b'\xff\xfe', 0, 2, 0)


def test_integer_width():
    with pytest.raises(MalformedFieldError):
        u16.read(b'\x00\x00\x02', 0, 3, 0)
    with pytest.raises(MalformedFieldError):
        u64.read(b'\x02', 0, 1, 0)
    with pytest.raises(ValueError):
        u16.to_bytes(65536)
    with pytest.raises(ValueError):
        u16.to_bytes(-1)


def test_boolean():
    # Any nonzero byte is true.
    assert boolean.read(b'\x07', 0, 1, 0) is True
    with pytest.raises(MalformedFieldError):
        boolean.read(b'\x01\x01', 0, 2, 0)
