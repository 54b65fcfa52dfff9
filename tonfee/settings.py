from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file='.env', extra='ignore')

    ESTIMATE_FEE_URL: str = 'https://toncenter.com/api/v2/estimateFee'
    REQUEST_TIMEOUT: float = 10
    REQUEST_ATTEMPTS: int = 3
    RETRY_DELAY: float = 1
    WALLET_FILE: str = '.env'
    MESSAGE: str = 'Test transaction message to '
    AMOUNT: str = '1000000000'
    BOC_WITH_CRC: bool = True
    BOC_ROOT_FIRST: bool = False
    LOG_LEVEL: str = 'INFO'
