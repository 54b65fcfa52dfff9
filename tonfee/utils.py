#!/usr/bin/env python3
# -*- coding: utf_8 -*-

import base64
import binascii
import fastcrc # pip3 install fastcrc
from decimal import Decimal
from .errors import AddressError

NANO = 10**9
BOUNCEABLE_TAG = 0x11
NON_BOUNCEABLE_TAG = 0x51
TESTNET_FLAG = 0x80


def from_nano(value):
	return Decimal(int(value)) / Decimal(NANO)
#end define

def to_nano(value):
	return int(Decimal(str(value)) * NANO)
#end define

def parse_addr(input_addr):
	if is_addr_full(input_addr):
		return parse_addr_full(input_addr)
	elif is_addr_b64(input_addr):
		workchain, addr, bounceable = parse_addr_b64(input_addr)
		return workchain, addr
	else:
		raise AddressError(f"parse_addr error: input address is not a address: {input_addr}")
#end define

def parse_addr_full(addr_full):
	buff = addr_full.split(':')
	if len(buff) != 2:
		raise AddressError(f"parse_addr_full error: expected `workchain:hex`, got {addr_full}")
	try:
		workchain = int(buff[0])
		addr_bytes = bytes.fromhex(buff[1])
	except ValueError as ex:
		raise AddressError(f"parse_addr_full error: {ex}") from ex
	if len(addr_bytes) != 32:
		raise AddressError("parse_addr_full error: addr_bytes is not 32 bytes")
	if workchain < -128 or workchain > 127:
		raise AddressError(f"parse_addr_full error: workchain {workchain} does not fit in int8")
	return workchain, addr_bytes.hex()
#end define

def parse_addr_b64(addr_b64):
	buff = addr_b64.replace('-', '+')
	buff = buff.replace('_', '/')
	try:
		b = base64.b64decode(buff.encode(), validate=True)
	except (binascii.Error, UnicodeEncodeError) as ex:
		raise AddressError(f"parse_addr_b64 error: {ex}") from ex
	if len(b) != 36:
		raise AddressError(f"parse_addr_b64 error: expected 36 bytes, got {len(b)}")
	
	tag = b[0] & ~TESTNET_FLAG
	if tag == BOUNCEABLE_TAG:
		bounceable = True
	elif tag == NON_BOUNCEABLE_TAG:
		bounceable = False
	else:
		raise AddressError(f"parse_addr_b64 error: unknown address tag {b[0]:#x}")
	#end if

	# get wc and addr
	crc = int.from_bytes(b[34:36], "big")
	check_crc = fastcrc.crc16.xmodem(bytes(b[:34]))
	if crc != check_crc:
		raise AddressError("parse_addr_b64 error: crc do not match")
	#end if

	workchain = int.from_bytes(b[1:2], "big", signed=True)
	addr = b[2:34].hex()
	return workchain, addr, bounceable
#end define

def format_addr_b64(workchain, addr, bounceable=True, testnet=False, url_safe=True):
	tag = BOUNCEABLE_TAG if bounceable else NON_BOUNCEABLE_TAG
	if testnet:
		tag |= TESTNET_FLAG
	addr_bytes = bytes.fromhex(addr)
	if len(addr_bytes) != 32:
		raise AddressError("format_addr_b64 error: addr_bytes is not 32 bytes")
	data = bytes([tag]) + workchain.to_bytes(1, "big", signed=True) + addr_bytes
	data += fastcrc.crc16.xmodem(data).to_bytes(2, "big")
	if url_safe:
		return base64.urlsafe_b64encode(data).decode()
	return base64.b64encode(data).decode()
#end define

def is_addr(addr):
	return is_addr_b64(addr) or is_addr_full(addr)
#end define

def is_addr_b64(addr):
	try:
		parse_addr_b64(addr)
	except AddressError:
		return False
	return True
#end define

def is_addr_full(addr):
	try:
		parse_addr_full(addr)
	except AddressError:
		return False
	return True
#end define
