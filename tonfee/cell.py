#!/usr/bin/env python3
# -*- coding: utf_8 -*-

import hashlib
from bitstring import Bits, ConstBitStream # pip3 install bitstring
from .bits import MAX_BITS
from .errors import AddressError, CapacityExceeded, CellUnderflow

MAX_REFS = 4


def walk_cells(root):
	"""
	Return the distinct cells reachable from `root` in post-order:
	every cell comes after all of its children, the root comes last.
	Cells are compared by identity, equal content is not merged.
	"""
	result = list()
	visited = {id(root)}
	stack = [(root, 0)]
	while stack:
		cell, pos = stack[-1]
		if pos < len(cell.refs):
			stack[-1] = (cell, pos + 1)
			ref = cell.refs[pos]
			if id(ref) not in visited:
				visited.add(id(ref))
				stack.append((ref, 0))
		else:
			stack.pop()
			result.append(cell)
	#end while
	return result
#end define

class Cell:
	__slots__ = ("_bits", "_refs", "_hash", "_depth")

	def __init__(self, bits=None, refs=None):
		bits = Bits() if bits is None else Bits(bits)
		refs = tuple(refs or ())
		if bits.len > MAX_BITS:
			raise CapacityExceeded(f"Cell error: {bits.len} bits exceeds cell capacity of {MAX_BITS} bits")
		if len(refs) > MAX_REFS:
			raise CapacityExceeded(f"Cell error: {len(refs)} refs exceeds cell capacity of {MAX_REFS} refs")
		for ref in refs:
			if not isinstance(ref, Cell):
				raise TypeError(f"Cell error: ref must be a Cell, not {type(ref).__name__}")
		self._bits = bits
		self._refs = refs
		self._hash = None
		self._depth = None
	#end define
	
	def __str__(self):
		result = f"<Cell {self.bits_len}:{self.data.hex()}={len(self._refs)}>"
		return result
	#end define
	
	def __repr__(self):
		return self.__str__()
	#end define
	
	@property
	def bits(self):
		return self._bits
	#end define
	
	@property
	def refs(self):
		return self._refs
	#end define
	
	@property
	def bits_len(self):
		return self._bits.len
	#end define
	
	@property
	def data(self):
		return self._bits.tobytes()
	#end define
	
	def begin_parse(self):
		return Slice(self)
	#end define
	
	def get_descriptors(self):
		# ordinary cell, level 0
		d1 = len(self._refs)
		d2 = (self.bits_len // 8) + (self.bits_len + 7) // 8
		result = bytes([d1, d2])
		return result
	#end define
	
	def get_data_with_completion(self):
		data = bytearray(self.data)
		unused_bits = 8 - (self.bits_len % 8)
		if unused_bits != 8:
			data[-1] |= 1 << (unused_bits - 1)
		#end if
		return bytes(data)
	#end define
	
	def hash(self):
		if self._hash is None:
			self._compute_tree()
		return self._hash
	#end define
	
	def get_depth(self):
		if self._depth is None:
			self._compute_tree()
		return self._depth
	#end define
	
	def _compute_tree(self):
		for cell in walk_cells(self):
			if cell._hash is None:
				cell._compute_hash()
	#end define
	
	def _compute_hash(self):
		# children are already hashed
		depths_list = [ref._depth + 1 for ref in self._refs]
		buff = self.get_descriptors() + self.get_data_with_completion()
		for ref in self._refs:
			buff += ref._depth.to_bytes(2, byteorder="big")
		for ref in self._refs:
			buff += ref._hash
		self._depth = max(depths_list, default=0)
		self._hash = hashlib.sha256(buff).digest()
	#end define
#end class

class Slice:
	def __init__(self, cell):
		self.cell = cell
		self.bit_stream = ConstBitStream(cell.bits)
		self.refs_pos = 0
	#end define
	
	def __str__(self):
		result = f"<Slice {self.bit_stream.pos}/{self.bit_stream.len}:{self.cell.data.hex()}={self.remain_refs}>"
		return result
	#end define
	
	@property
	def remain_bits(self):
		return self.bit_stream.len - self.bit_stream.pos
	#end define
	
	@property
	def remain_refs(self):
		return len(self.cell.refs) - self.refs_pos
	#end define
	
	def read(self, read_len):
		if read_len < 0 or read_len > self.remain_bits:
			raise CellUnderflow(f"Slice error: cannot read {read_len} bits, {self.remain_bits} left")
		return self.bit_stream.read(read_len)
	#end define
	
	def load_bits(self, read_len):
		return Bits(self.read(read_len))
	#end define
	
	def load_bit(self):
		return self.read(1)[0]
	#end define
	
	def load_uint(self, read_len):
		if read_len == 0:
			return 0
		return self.read(read_len).uint
	#end define
	
	def load_int(self, read_len):
		if read_len == 0:
			return 0
		return self.read(read_len).int
	#end define
	
	def load_bytes(self, read_len):
		return self.read(read_len * 8).bytes
	#end define
	
	def load_coins(self):
		ln = self.load_uint(4)
		return self.load_uint(ln * 8)
	#end define
	
	def load_address(self):
		tag = self.load_uint(2)
		if tag == 0b00:
			return None
		if tag != 0b10:
			raise AddressError(f"load_address error: unsupported address tag {tag:02b}")
		if self.load_bit():
			raise AddressError("load_address error: anycast addresses are not supported")
		workchain = self.load_int(8)
		addr = self.load_bytes(32).hex()
		return f"{workchain}:{addr}"
	#end define
	
	def load_ref(self):
		if self.remain_refs == 0:
			raise CellUnderflow("Slice error: no refs left")
		result = self.cell.refs[self.refs_pos]
		self.refs_pos += 1
		return result
	#end define
	
	def load_maybe_ref(self):
		if self.load_bit():
			return self.load_ref()
		return None
	#end define
	
	def load_binary_snake(self):
		result = bytearray()
		slice = self
		while True:
			result += slice.load_bytes(slice.remain_bits // 8)
			if slice.remain_refs == 0:
				break
			slice = slice.load_ref().begin_parse()
		#end while
		return bytes(result)
	#end define
#end class
