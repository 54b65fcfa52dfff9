#!/usr/bin/env python3
# -*- coding: utf_8 -*-

import base64
import fastcrc # pip3 install fastcrc
from .cell import walk_cells
from .errors import EmptyTree, TooManyCells

BOC_MAGIC = bytes.fromhex("b5ee9c72")
MAX_CELLS = 2**24 - 1


def serialize_boc(cell, with_crc=False, root_first=False):
	"""
	serialized_boc#b5ee9c72 has_idx:(## 1) has_crc32c:(## 1) 
	  has_cache_bits:(## 1) flags:(## 2) { flags = 0 }
	  size:(## 3) { size <= 4 }
	  off_bytes:(## 8) { off_bytes <= 8 } 
	  cells:(##(size * 8)) 
	  roots:(##(size * 8)) { roots >= 1 }
	  absent:(##(size * 8)) { roots + absent <= cells }
	  tot_cells_size:(##(off_bytes * 8))
	  root_list:(roots * ##(size * 8))
	  index:has_idx?(cells * ##(off_bytes * 8))
	  cell_data:(tot_cells_size * [ uint8 ])
	  crc32c:has_crc32c?uint32
	  = BagOfCells;

	Cells are written children first, so every reference points to a
	smaller index. With `root_first` the order is reversed and the root
	gets index 0.
	"""
	if cell is None:
		raise EmptyTree("serialize_boc error: root cell is None")
	order_cells = walk_cells(cell)
	if root_first:
		order_cells.reverse()
	cells_num = len(order_cells)
	if cells_num > MAX_CELLS:
		raise TooManyCells(f"serialize_boc error: {cells_num} cells, max {MAX_CELLS}")
	index = {id(item): i for i, item in enumerate(order_cells)}
	
	# bytes needed to store num of cells
	cell_size = bytes_needed(cells_num)
	
	payload = bytearray()
	for item in order_cells:
		payload += serialize_cell(item, index, cell_size)
	#end for
	
	# bytes needed to store len of payload
	size = bytes_needed(len(payload))
	
	flags = 0b00000000
	if with_crc:
		flags |= 0b01000000
	flags |= cell_size
	
	result = bytearray()
	result += BOC_MAGIC
	result += bytes([flags, size])
	
	# cells num
	result += dynamic_int_bytes(cells_num, cell_size)

	# roots num (only 1 supported)
	result += dynamic_int_bytes(1, cell_size)

	# absent (only 0 supported)
	result += dynamic_int_bytes(0, cell_size)

	# len of data
	result += dynamic_int_bytes(len(payload), size)

	# root list
	result += dynamic_int_bytes(index[id(cell)], cell_size)
	result += payload
	
	if with_crc:
		checksum = fastcrc.crc32.iscsi(bytes(result))
		result += int.to_bytes(checksum, length=4, byteorder="little")
	#end if
	
	return bytes(result)
#end define

def to_boc_base64(cell, **kwargs):
	data = serialize_boc(cell, **kwargs)
	return base64.b64encode(data).decode()
#end define

def serialize_cell(cell, index, cell_size):
	result = cell.get_descriptors() + cell.get_data_with_completion()
	for ref in cell.refs:
		result += dynamic_int_bytes(index[id(ref)], cell_size)
	return result
#end define

def bytes_needed(value):
	return max(1, (value.bit_length() + 7) // 8)
#end define

def dynamic_int_bytes(value, size):
	return int.to_bytes(value, length=size, byteorder="big", signed=False)
#end define
