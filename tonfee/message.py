#!/usr/bin/env python3
# -*- coding: utf_8 -*-

from .boc import to_boc_base64
from .builder import begin_cell


def build_transaction_cell(message, amount):
	text = f"{message} {amount}"
	builder = begin_cell()
	builder.store_binary_snake(text.encode("utf-8"))
	return builder.end_cell()
#end define

def create_transaction_body(message, amount, with_crc=False, root_first=False):
	cell = build_transaction_cell(message, amount)
	return to_boc_base64(cell, with_crc=with_crc, root_first=root_first)
#end define
