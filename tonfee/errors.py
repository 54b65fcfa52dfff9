#!/usr/bin/env python3
# -*- coding: utf_8 -*-


class TonFeeError(Exception):
	pass
#end class

class CellError(TonFeeError):
	pass
#end class

class CapacityExceeded(CellError):
	pass
#end class

class ValueTooLarge(CellError):
	pass
#end class

class BuilderAlreadyFinalized(CellError):
	pass
#end class

class CellUnderflow(CellError):
	pass
#end class

class BocError(TonFeeError):
	pass
#end class

class EmptyTree(BocError):
	pass
#end class

class TooManyCells(BocError):
	pass
#end class

class AddressError(TonFeeError, ValueError):
	pass
#end class

class MnemonicError(TonFeeError, ValueError):
	pass
#end class

class FeeEstimationError(TonFeeError):
	pass
#end class
