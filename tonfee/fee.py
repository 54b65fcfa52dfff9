import logging
import time
from decimal import Decimal
from typing import Optional

import requests
from pydantic import ValidationError

from .errors import FeeEstimationError
from .models import EstimateFeeRequest
from .models import EstimateFeeResponse
from .utils import from_nano

logger = logging.getLogger(__name__)

DEFAULT_URL = 'https://toncenter.com/api/v2/estimateFee'
RETRY_STATUSES = (429, 500, 502, 503, 504)


class FeeEstimationClient:
    def __init__(
            self,
            url: str = DEFAULT_URL,
            timeout: float = 10,
            attempts: int = 3,
            retry_delay: float = 1,
            session: Optional[requests.Session] = None
    ):
        self.url = url
        self.timeout = timeout
        self.attempts = max(1, attempts)
        self.retry_delay = retry_delay
        self.session = session or requests.Session()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self) -> None:
        self.session.close()

    def estimate_fee(self, address: str, body: str) -> Decimal:
        """
        Returns the total source fee of a message in TON
        :param address: destination address
        :param body: base64 encoded BOC of the message body
        :return:
        """
        payload = EstimateFeeRequest(address=address, body=body)
        response = self._post(payload.model_dump(by_alias=True))
        try:
            parsed = EstimateFeeResponse.model_validate(response.json())
        except (ValueError, ValidationError) as ex:
            raise FeeEstimationError(f'error decoding response: {ex}') from ex
        if not parsed.ok or parsed.result is None:
            reason = parsed.error or 'invalid response'
            raise FeeEstimationError(f'error estimating fee: {reason}')
        total = parsed.result.source_fees.total
        logger.debug(f'estimate_fee {address}: {total} nanoton')
        return from_nano(total)

    def _post(self, payload: dict) -> requests.Response:
        error = None
        for step in range(self.attempts):
            if step > 0:
                time.sleep(self.retry_delay)
            logger.debug(f'POST {self.url} step: {step}')
            try:
                response = self.session.post(
                    self.url,
                    json=payload,
                    headers={'Content-Type': 'application/json'},
                    timeout=self.timeout
                )
            except (requests.ConnectionError, requests.Timeout) as ex:
                error = f'error sending request: {ex}'
            except requests.RequestException as ex:
                raise FeeEstimationError(f'error sending request: {ex}') from ex
            else:
                if response.status_code == 200:
                    return response
                error = (
                    f'failed to get estimate fee: '
                    f'{response.status_code} {response.reason}'
                )
                if response.status_code not in RETRY_STATUSES:
                    raise FeeEstimationError(error)
            logger.warning(f'estimate_fee step: {step}, error: {error}')
        raise FeeEstimationError(error)
