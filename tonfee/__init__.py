"""
TON message bodies as Bags of Cells, and their fee estimation

Example:

>> from tonfee import begin_cell, serialize_boc

>> builder = begin_cell()
>> builder.store_uint(1000000000, 64)
>> cell = builder.end_cell()
>> print(serialize_boc(cell).hex())
<< b5ee9c7201010101000a000010000000003b9aca00
"""
from .bits import BitWriter, MAX_BITS
from .cell import Cell, Slice, MAX_REFS, walk_cells
from .builder import CellBuilder, begin_cell
from .boc import serialize_boc, to_boc_base64
from .message import build_transaction_cell, create_transaction_body
from .errors import *
