#!/usr/bin/env python3
# -*- coding: utf_8 -*-

from bitstring import Bits, BitArray # pip3 install bitstring
from .errors import CapacityExceeded, ValueTooLarge

MAX_BITS = 1023


class BitWriter:
	"""
	Bounded bit accumulator for the payload of a single cell.
	Bits are written most-significant first. A write that does not fit
	raises and leaves the buffer unchanged.
	"""

	def __init__(self, max_bits=MAX_BITS):
		self.max_bits = max_bits
		self.buffer = BitArray()
	#end define
	
	def __len__(self):
		return self.buffer.len
	#end define
	
	def __str__(self):
		return f"<BitWriter {self.bits_len}/{self.max_bits}:{self.buffer.bin}>"
	#end define
	
	@property
	def bits_len(self):
		return self.buffer.len
	#end define
	
	@property
	def remain_bits(self):
		return self.max_bits - self.buffer.len
	#end define
	
	def get_bits(self):
		return Bits(self.buffer)
	#end define
	
	def append_bytes(self, data, bit_length=None):
		data = bytes(data)
		available_len = len(data) * 8
		if bit_length is None:
			bit_length = available_len
		if bit_length < 0 or bit_length > available_len:
			raise ValueTooLarge(f"append_bytes error: cannot take {bit_length} bits from {len(data)} bytes")
		if bit_length == 0:
			return
		self._append(Bits(bytes=data, length=bit_length))
	#end define
	
	def append_uint(self, value, width_bits):
		if width_bits < 0:
			raise ValueTooLarge(f"append_uint error: negative width {width_bits}")
		if value < 0 or value >= 1 << width_bits:
			raise ValueTooLarge(f"append_uint error: {value} does not fit in {width_bits} unsigned bits")
		if width_bits == 0:
			return
		self._append(Bits(uint=value, length=width_bits))
	#end define
	
	def append_int(self, value, width_bits):
		if width_bits < 0:
			raise ValueTooLarge(f"append_int error: negative width {width_bits}")
		if width_bits == 0:
			if value != 0:
				raise ValueTooLarge(f"append_int error: {value} does not fit in 0 bits")
			return
		limit = 1 << (width_bits - 1)
		if value < -limit or value >= limit:
			raise ValueTooLarge(f"append_int error: {value} does not fit in {width_bits} signed bits")
		self._append(Bits(int=value, length=width_bits))
	#end define
	
	def append_bit(self, flag):
		self._append(Bits(bool=bool(flag)))
	#end define
	
	def append_bits(self, bits):
		if isinstance(bits, BitWriter):
			bits = bits.buffer
		if len(bits) == 0:
			return
		self._append(Bits(bits))
	#end define
	
	def _append(self, bits):
		if self.buffer.len + bits.len > self.max_bits:
			raise CapacityExceeded(f"BitWriter error: {self.buffer.len} + {bits.len} bits exceeds cell capacity of {self.max_bits} bits")
		self.buffer.append(bits)
	#end define
#end class
