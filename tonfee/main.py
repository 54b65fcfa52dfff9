#!/usr/bin/env python3
# -*- coding: utf_8 -*-

import sys
import logging
from .errors import TonFeeError
from .fee import FeeEstimationClient
from .message import create_transaction_body
from .settings import Settings
from .wallet import load_or_create_wallet

logger = logging.getLogger(__name__)


def run(settings, client=None):
	wallet = load_or_create_wallet(settings.WALLET_FILE)
	body = create_transaction_body(
		settings.MESSAGE + wallet.address,
		settings.AMOUNT,
		with_crc=settings.BOC_WITH_CRC,
		root_first=settings.BOC_ROOT_FIRST
	)
	logger.debug(f"transaction body: {body}")
	if client is None:
		client = FeeEstimationClient(
			settings.ESTIMATE_FEE_URL,
			timeout=settings.REQUEST_TIMEOUT,
			attempts=settings.REQUEST_ATTEMPTS,
			retry_delay=settings.RETRY_DELAY
		)
	with client:
		fee = client.estimate_fee(wallet.address, body)
	return fee
#end define

def main():
	settings = Settings()
	logging.basicConfig(level=settings.LOG_LEVEL, format="[%(levelname)8s] %(asctime)s %(name)s: %(message)s")
	try:
		fee = run(settings)
	except TonFeeError as err:
		logger.error(err)
		sys.exit(1)
	print(f"Estimated fee: {fee:.9f} TON")
#end define
