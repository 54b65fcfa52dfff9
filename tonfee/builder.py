#!/usr/bin/env python3
# -*- coding: utf_8 -*-

from .bits import BitWriter
from .cell import Cell, MAX_REFS
from .errors import BuilderAlreadyFinalized, CapacityExceeded, ValueTooLarge
from .utils import parse_addr

SNAKE_CHUNK_BYTES = 127
MAX_COINS_BYTES = 15


def begin_cell():
	return CellBuilder()
#end define

class CellBuilder:
	def __init__(self):
		self.bits = BitWriter()
		self.refs = list()
		self.finalized = False
	#end define
	
	def __str__(self):
		return f"<CellBuilder {self.bits_len}:{self.bits.buffer.tobytes().hex()}={self.refs_len}>"
	#end define
	
	@property
	def bits_len(self):
		return self.bits.bits_len
	#end define
	
	@property
	def refs_len(self):
		return len(self.refs)
	#end define
	
	@property
	def remain_bits(self):
		return self.bits.remain_bits
	#end define
	
	@property
	def remain_refs(self):
		return MAX_REFS - len(self.refs)
	#end define
	
	def store_uint(self, value, bits):
		self._check_not_finalized()
		self.bits.append_uint(value, bits)
		return self
	#end define
	
	def store_int(self, value, bits):
		self._check_not_finalized()
		self.bits.append_int(value, bits)
		return self
	#end define
	
	def store_bit(self, flag):
		self._check_not_finalized()
		self.bits.append_bit(flag)
		return self
	#end define
	
	def store_slice(self, data, bit_length):
		self._check_not_finalized()
		self.bits.append_bytes(data, bit_length)
		return self
	#end define
	
	def store_bytes(self, data):
		self._check_not_finalized()
		self.bits.append_bytes(data)
		return self
	#end define
	
	def store_coins(self, amount):
		"""
		nanograms$_ amount:(VarUInteger 16) = Grams;
		"""
		self._check_not_finalized()
		if amount < 0:
			raise ValueTooLarge(f"store_coins error: negative amount {amount}")
		ln = (amount.bit_length() + 7) // 8
		if ln > MAX_COINS_BYTES:
			raise ValueTooLarge(f"store_coins error: {amount} does not fit in VarUInteger 16")
		if 4 + ln * 8 > self.remain_bits:
			raise CapacityExceeded(f"store_coins error: {4 + ln*8} bits do not fit, {self.remain_bits} left")
		self.bits.append_uint(ln, 4)
		self.bits.append_uint(amount, ln * 8)
		return self
	#end define
	
	def store_address(self, addr):
		"""
		addr_none$00 = MsgAddressExt;
		addr_std$10 anycast:(Maybe Anycast) workchain_id:int8 address:bits256 = MsgAddressInt;
		"""
		self._check_not_finalized()
		if addr is None:
			self.bits.append_uint(0b00, 2)
			return self
		workchain, addr_hex = parse_addr(addr)
		if 267 > self.remain_bits:
			raise CapacityExceeded(f"store_address error: 267 bits do not fit, {self.remain_bits} left")
		self.bits.append_uint(0b10, 2)
		self.bits.append_bit(False) # anycast
		self.bits.append_int(workchain, 8)
		self.bits.append_bytes(bytes.fromhex(addr_hex))
		return self
	#end define
	
	def store_ref(self, cell):
		self._check_not_finalized()
		if not isinstance(cell, Cell):
			raise TypeError(f"store_ref error: expected Cell, got {type(cell).__name__}")
		if self.remain_refs == 0:
			raise CapacityExceeded(f"store_ref error: cell already has {MAX_REFS} refs")
		self.refs.append(cell)
		return self
	#end define
	
	def store_maybe_ref(self, cell):
		self._check_not_finalized()
		if cell is None:
			self.bits.append_bit(False)
			return self
		if not isinstance(cell, Cell):
			raise TypeError(f"store_maybe_ref error: expected Cell, got {type(cell).__name__}")
		if self.remain_refs == 0:
			raise CapacityExceeded(f"store_maybe_ref error: cell already has {MAX_REFS} refs")
		self.bits.append_bit(True)
		self.refs.append(cell)
		return self
	#end define
	
	def store_builder(self, builder):
		self._check_not_finalized()
		if builder.bits_len > self.remain_bits or builder.refs_len > self.remain_refs:
			raise CapacityExceeded("store_builder error: builder does not fit")
		self.bits.append_bits(builder.bits)
		self.refs += builder.refs
		return self
	#end define
	
	def store_binary_snake(self, data):
		"""
		Split `data` over a chain of cells. The first chunk fills the whole
		bytes left in this builder, every next chunk takes up to 127 bytes
		of a new cell referenced by the previous one. No tag bits are written.
		"""
		self._check_not_finalized()
		data = bytes(data)
		space = self.remain_bits // 8
		head, tail = data[:space], data[space:]
		if tail and self.remain_refs == 0:
			raise CapacityExceeded("store_binary_snake error: no ref left for the snake tail")
		
		# build the chain from its last cell back to the first
		chunks = [tail[i:i+SNAKE_CHUNK_BYTES] for i in range(0, len(tail), SNAKE_CHUNK_BYTES)]
		next_cell = None
		for chunk in reversed(chunks):
			builder = CellBuilder()
			builder.store_bytes(chunk)
			if next_cell is not None:
				builder.store_ref(next_cell)
			next_cell = builder.end_cell()
		#end for
		
		self.bits.append_bytes(head)
		if next_cell is not None:
			self.refs.append(next_cell)
		return self
	#end define
	
	def end_cell(self):
		self._check_not_finalized()
		self.finalized = True
		result = Cell(self.bits.get_bits(), self.refs)
		return result
	#end define
	
	def _check_not_finalized(self):
		if self.finalized:
			raise BuilderAlreadyFinalized("CellBuilder error: builder is already finalized by end_cell")
	#end define
#end class
