import pytest

from tonfee.bits import BitWriter, MAX_BITS
from tonfee.errors import CapacityExceeded, ValueTooLarge


def test_write_full_capacity():
    writer = BitWriter()
    writer.append_uint(0, MAX_BITS)
    assert writer.bits_len == 1023
    assert writer.remain_bits == 0


def test_write_over_capacity_fails():
    writer = BitWriter()
    with pytest.raises(CapacityExceeded):
        writer.append_uint(0, 1024)
    assert writer.bits_len == 0


def test_failed_write_keeps_buffer():
    writer = BitWriter()
    writer.append_bytes(b"\xff" * 127)
    writer.append_uint(0b1111, 4)
    assert writer.bits_len == 1020
    with pytest.raises(CapacityExceeded):
        writer.append_uint(0, 4)
    assert writer.bits_len == 1020
    assert writer.get_bits().bytes[:127] == b"\xff" * 127
    writer.append_uint(0b101, 3)
    assert writer.bits_len == 1023


def test_append_uint_big_endian():
    writer = BitWriter()
    writer.append_uint(1000000000, 64)
    assert writer.get_bits().bytes == (1000000000).to_bytes(8, 'big')


@pytest.mark.parametrize('value,width', (
    (256, 8),
    (-1, 8),
    (2, 1),
    (1, 0),
))
def test_append_uint_value_too_large(value, width):
    writer = BitWriter()
    with pytest.raises(ValueTooLarge):
        writer.append_uint(value, width)


@pytest.mark.parametrize('value,width,expected', (
    (-1, 8, '11111111'),
    (-128, 8, '10000000'),
    (127, 8, '01111111'),
    (-2, 3, '110'),
))
def test_append_int_twos_complement(value, width, expected):
    writer = BitWriter()
    writer.append_int(value, width)
    assert writer.get_bits().bin == expected


@pytest.mark.parametrize('value,width', ((128, 8), (-129, 8), (1, 1)))
def test_append_int_value_too_large(value, width):
    writer = BitWriter()
    with pytest.raises(ValueTooLarge):
        writer.append_int(value, width)


def test_append_bytes_prefix():
    writer = BitWriter()
    writer.append_bytes(b'\xf0\xff', 6)
    assert writer.get_bits().bin == '111100'


def test_append_bytes_too_many_bits():
    writer = BitWriter()
    with pytest.raises(ValueTooLarge):
        writer.append_bytes(b'\x00', 9)


def test_append_bits_from_writer():
    first = BitWriter()
    first.append_bit(True)
    first.append_bit(False)
    second = BitWriter()
    second.append_uint(1, 1)
    second.append_bits(first)
    assert second.get_bits().bin == '110'


@pytest.mark.parametrize('append', (
    lambda w: w.append_uint(0, -1),
    lambda w: w.append_int(0, -8),
))
def test_negative_width(append):
    writer = BitWriter()
    with pytest.raises(ValueTooLarge):
        append(writer)
    assert writer.bits_len == 0
