import base64

import fastcrc
import pytest
from bitstring import Bits

from tonfee import boc
from tonfee.builder import begin_cell
from tonfee.cell import Cell
from tonfee.errors import EmptyTree, TooManyCells

MESSAGE = 'Test transaction message to '
WALLET_ADDRESS = (
    'c55257c360c07c72029aebc1b53c05ed0362ada38ead3e3e9efa3708e5349553'
)
UINT64_BOC = bytes.fromhex('b5ee9c7201010101000a000010000000003b9aca00')
EMPTY_CELL_BOC_CRC = 'te6cckEBAQEAAgAAAEysuc0='
ROOT_FIRST_BOC = bytes.fromhex(
    'b5ee9c7201010301000e000201c002010101ff0200060aaaaa'
)
BOTTOM_UP_BOC = bytes.fromhex(
    'b5ee9c7201010301000e02' '00060aaaaa' '0101ff00' '0201c00001'
)


def read_header(data):
    assert data[:4] == boc.BOC_MAGIC
    flags = data[4]
    size = flags & 0b111
    off_bytes = data[5]
    pos = 6
    values = []
    for ln in (size, size, size, off_bytes, size):
        values.append(int.from_bytes(data[pos:pos + ln], 'big'))
        pos += ln
    cells, roots, absent, tot_cells_size, root = values
    return flags, size, cells, roots, absent, tot_cells_size, root, pos


def read_cell_refs(data):
    flags, size, cells, _, _, _, _, pos = read_header(data)
    result = []
    for _ in range(cells):
        d1, d2 = data[pos], data[pos + 1]
        pos += 2 + (d2 + 1) // 2
        refs = []
        for _ in range(d1 & 0b111):
            refs.append(int.from_bytes(data[pos:pos + size], 'big'))
            pos += size
        result.append(refs)
    return result


def sample_tree():
    c = Cell(Bits('0x0aaaaa'))
    b = Cell(Bits('0b1111111'), [c])
    return Cell(Bits('0b1'), [c, b])


def test_serialize_single_cell():
    cell = begin_cell().store_uint(1000000000, 64).end_cell()
    assert boc.serialize_boc(cell) == UINT64_BOC


def test_serialize_empty_cell_with_crc():
    assert boc.to_boc_base64(Cell(), with_crc=True) == EMPTY_CELL_BOC_CRC


def test_serialize_root_first():
    assert boc.serialize_boc(sample_tree(), root_first=True) == ROOT_FIRST_BOC


def test_serialize_bottom_up():
    data = boc.serialize_boc(sample_tree())
    assert data == BOTTOM_UP_BOC
    flags, size, cells, roots, absent, tot, root, _ = read_header(data)
    assert (cells, roots, absent, tot, root) == (3, 1, 0, 14, 2)


def test_no_forward_references():
    data = boc.serialize_boc(sample_tree())
    for i, refs in enumerate(read_cell_refs(data)):
        assert all(ref < i for ref in refs)


def test_root_first_references_point_forward():
    data = boc.serialize_boc(sample_tree(), root_first=True)
    assert read_header(data)[6] == 0
    for i, refs in enumerate(read_cell_refs(data)):
        assert all(ref > i for ref in refs)


def test_shared_cell_written_once():
    leaf = Cell(Bits('0xff'))
    root = Cell(refs=[leaf, leaf])
    data = boc.serialize_boc(root)
    assert read_header(data)[2] == 2
    assert read_cell_refs(data) == [[], [0, 0]]


def test_serialize_is_deterministic():
    cell = begin_cell().store_binary_snake(b'\x07' * 1000).end_cell()
    assert boc.serialize_boc(cell) == boc.serialize_boc(cell)
    assert boc.serialize_boc(cell, with_crc=True) == boc.serialize_boc(cell, with_crc=True)


def test_crc_trailer():
    assert fastcrc.crc32.iscsi(b'123456789') == 0xe3069283
    cell = begin_cell().store_binary_snake(b'crc' * 100).end_cell()
    data = boc.serialize_boc(cell, with_crc=True)
    assert data[4] & 0b01000000
    checksum = fastcrc.crc32.iscsi(data[:-4])
    assert data[-4:] == checksum.to_bytes(4, 'little')
    assert data[:-4][6:] == boc.serialize_boc(cell)[6:]


@pytest.mark.parametrize('text', (
    MESSAGE + WALLET_ADDRESS,
    (MESSAGE + WALLET_ADDRESS) * 10,
))
def test_message_with_address(text):
    cell = begin_cell().store_binary_snake(text.encode()).end_cell()
    chain = 1
    item = cell
    while item.refs:
        item = item.refs[0]
        chain += 1
    body = boc.to_boc_base64(cell)
    assert body
    data = base64.b64decode(body)
    assert data.startswith(boc.BOC_MAGIC)
    assert read_header(data)[2] == chain
    assert read_header(data)[6] == chain - 1


def test_index_size_grows_with_cells():
    cell = begin_cell().store_binary_snake(b'\x00' * 127 * 300).end_cell()
    data = boc.serialize_boc(cell)
    flags, size, cells, _, _, _, root, _ = read_header(data)
    assert size == 2
    assert cells == 300
    assert root == 299


def test_empty_tree():
    with pytest.raises(EmptyTree):
        boc.serialize_boc(None)


def test_too_many_cells(monkeypatch):
    monkeypatch.setattr(boc, 'MAX_CELLS', 2)
    cell = begin_cell().store_binary_snake(b'\x00' * 300).end_cell()
    with pytest.raises(TooManyCells):
        boc.serialize_boc(cell)


def test_serialize_long_chain():
    cells_num = 10000
    cell = begin_cell().store_binary_snake(b'\x01' * 127 * cells_num).end_cell()
    data = boc.serialize_boc(cell)
    flags, size, cells, roots, absent, tot, root, pos = read_header(data)
    assert size == 2
    assert data[5] == 3
    assert cells == cells_num
    assert root == cells_num - 1
    assert tot == cells_num * (2 + 127) + (cells_num - 1) * size
    assert len(data) == pos + tot
