import os
from typing import Optional

from environs import Env
from pydantic_settings import BaseSettings
from stellar_sdk import Network

env = Env()
env.read_env()

start_path = os.path.dirname(os.path.dirname(__file__))
dotenv_path = os.path.join(start_path, '.env')


class Settings(BaseSettings):
    horizon_url: str = 'https://horizon-testnet.stellar.org'
    friendbot_url: str = 'https://friendbot.stellar.org'
    network_passphrase: str = Network.TESTNET_NETWORK_PASSPHRASE
    base_fee: int = 100
    tx_timeout: int = 30
    history_limit: int = 10
    sentry_dsn: Optional[str] = None
    log_path: str = 'log/app.log'
    port: int = 5000
    test_mode: bool = True

    class Config:
        env_file = dotenv_path
        env_file_encoding = 'utf-8'


config = Settings()


def update_test_mode():
    config.test_mode = env.str('ENVIRONMENT', 'test') != 'production'
