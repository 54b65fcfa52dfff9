#!/usr/bin/env python3
# -*- coding: utf_8 -*-

import os
import logging
from dotenv import dotenv_values, set_key # pip3 install python-dotenv
from mnemonic import Mnemonic # pip3 install mnemonic
from nacl.signing import SigningKey # pip3 install pynacl
from .errors import MnemonicError

logger = logging.getLogger(__name__)

MNEMONIC_LANGUAGE = "english"


def generate_mnemonic(strength=256):
	return Mnemonic(MNEMONIC_LANGUAGE).generate(strength=strength)
#end define

def mnemonic_to_seed(mnemonic, passphrase=""):
	if not Mnemonic(MNEMONIC_LANGUAGE).check(mnemonic):
		raise MnemonicError("mnemonic_to_seed error: invalid BIP-39 mnemonic")
	return Mnemonic.to_seed(mnemonic, passphrase=passphrase)
#end define

def address_from_seed(seed):
	return seed[:32].hex()
#end define

class Wallet:
	def __init__(self, address, mnemonic=None, seed=None):
		self.address = address
		self.mnemonic = mnemonic
		self.seed = seed
	#end define
	
	def __str__(self):
		return f"<Wallet {self.address}>"
	#end define
	
	@classmethod
	def from_mnemonic(cls, mnemonic, passphrase=""):
		seed = mnemonic_to_seed(mnemonic, passphrase)
		return cls(address_from_seed(seed), mnemonic=mnemonic, seed=seed)
	#end define
	
	@classmethod
	def generate(cls, strength=256):
		return cls.from_mnemonic(generate_mnemonic(strength))
	#end define
	
	@property
	def public_key(self):
		if self.seed is None:
			return None
		signing_key = SigningKey(self.seed[:32])
		return signing_key.verify_key.encode()
	#end define
#end class

def save_wallet(wallet, path):
	if wallet.mnemonic is None:
		raise MnemonicError("save_wallet error: wallet has no mnemonic")
	# set_key expects an existing file
	open(path, 'a').close()
	set_key(path, "MNEMONIC", wallet.mnemonic)
	set_key(path, "SEED", wallet.seed.hex())
	set_key(path, "WALLET_ADDRESS", wallet.address)
#end define

def load_wallet(path):
	values = dotenv_values(path)
	mnemonic = values.get("MNEMONIC")
	address = values.get("WALLET_ADDRESS")
	if mnemonic:
		wallet = Wallet.from_mnemonic(mnemonic)
		if address and address != wallet.address:
			raise MnemonicError(f"load_wallet error: WALLET_ADDRESS in {path} does not match MNEMONIC")
		return wallet
	if address:
		return Wallet(address)
	raise MnemonicError(f"load_wallet error: no MNEMONIC or WALLET_ADDRESS in {path}")
#end define

def has_wallet(path):
	if not os.path.isfile(path):
		return False
	values = dotenv_values(path)
	return bool(values.get("MNEMONIC") or values.get("WALLET_ADDRESS"))
#end define

def load_or_create_wallet(path):
	if has_wallet(path):
		wallet = load_wallet(path)
		logger.debug(f"Loaded wallet {wallet.address} from {path}")
		return wallet
	wallet = Wallet.generate()
	save_wallet(wallet, path)
	logger.info(f"Created new wallet {wallet.address}, saved to {path}")
	return wallet
#end define
