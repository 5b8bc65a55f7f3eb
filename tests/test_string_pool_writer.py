import struct

import pytest

from respool.constants import RES_STRING_POOL_TYPE, SORTED_FLAG, UTF8_FLAG
from respool.parsers import StringPool
from respool.serialization import build_string_pool, encode_utf8_entry, encode_utf16_entry

SAMPLE = ['', 'a', 'hello world', 'ünïcödé', '日本語', '\U0001F600 grin']


def test_encode_utf8_entry():
    assert encode_utf8_entry('foo') == b'\x03\x03foo\x00'
    # UTF-16 length first, then UTF-8 byte length
    assert encode_utf8_entry('é') == b'\x01\x02\xc3\xa9\x00'
    assert encode_utf8_entry('') == b'\x00\x00\x00'


def test_encode_utf16_entry():
    assert encode_utf16_entry('ab') == b'\x02\x00a\x00b\x00\x00\x00'
    assert encode_utf16_entry('\U0001F600')[:2] == struct.pack('<H', 2)


def test_utf8_length_limit():
    encode_utf8_entry('x' * 127)
    with pytest.raises(ValueError):
        encode_utf8_entry('x' * 128)
    with pytest.raises(ValueError):
        encode_utf8_entry('é' * 64)


def test_utf16_length_limit():
    encode_utf16_entry('x' * 0x7FFF)
    with pytest.raises(ValueError):
        encode_utf16_entry('x' * 0x8000)


def test_header_layout():
    data = build_string_pool(['foo', 'bar'], sorted_flag=True)
    chunk_type, header_size, size = struct.unpack_from('<HHI', data, 0)
    string_count, style_count, flags, string_start, style_start = struct.unpack_from('<5I', data, 8)

    assert chunk_type == RES_STRING_POOL_TYPE
    assert header_size == 20
    assert size == len(data) - 8
    assert (string_count, style_count, style_start) == (2, 0, 0)
    assert flags == UTF8_FLAG | SORTED_FLAG
    assert string_start == 28
    # String data padded to 4 bytes
    assert (len(data) - 8 - string_start) % 4 == 0


@pytest.mark.parametrize('utf8', [True, False])
def test_decodes_what_was_built(utf8):
    pool = StringPool.from_bytes(build_string_pool(SAMPLE, utf8=utf8))

    assert list(pool.strings) == SAMPLE
    assert pool.header.string_count == len(SAMPLE)
    assert pool.is_utf8 == utf8


def test_longest_short_form_strings():
    utf8_pool = StringPool.from_bytes(build_string_pool(['x' * 127]))
    utf16_pool = StringPool.from_bytes(build_string_pool(['y' * 0x7FFF], utf8=False))

    assert utf8_pool.strings == ('x' * 127,)
    assert utf16_pool.strings == ('y' * 0x7FFF,)


def test_deduplicate_shares_offsets():
    pool = StringPool.from_bytes(build_string_pool(['a', 'b', 'a'], deduplicate=True))

    assert pool.strings == ('a', 'b', 'a')
    assert pool.offsets[0] == pool.offsets[2]
    assert pool.offsets[1] != pool.offsets[0]


def test_padding_counted_in_chunk_size():
    data = build_string_pool(['foo'], padding=12)
    assert struct.unpack_from('<I', data, 4)[0] == len(data) - 8
    assert data.endswith(b'\x00' * 12)
    assert StringPool.from_bytes(data).strings == ('foo',)
