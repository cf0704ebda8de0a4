import os
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from dotenv import load_dotenv

from safpay.errors.exceptions import ConfigurationError

load_dotenv()


def _optional_float(value: Optional[str]) -> Optional[float]:
    if value in (None, ''):
        return None
    return float(value)


class Config:
    """Base configuration"""
    PORT = int(os.getenv('PORT', 3001))

    # Request body limit (2000kb)
    MAX_CONTENT_LENGTH = 2000 * 1024

    # Daraja endpoints
    SAFARICOM_AUTH_URL = os.getenv('SAFARICOM_AUTH_URL')
    SAFARICOM_STK_ENDPOINT = os.getenv('SAFARICOM_STK_ENDPOINT')
    SAFARICOM_REGISTER_PAYBILL = os.getenv('SAFARICOM_REGISTER_PAYBILL')

    # Daraja credentials
    SAFARICOM_CONSUMER_KEY = os.getenv('SAFARICOM_CONSUMER_KEY')
    SAFARICOM_CONSUMER_SECRET = os.getenv('SAFARICOM_CONSUMER_SECRET')
    SAFARICOM_PASSKEY = os.getenv('SAFARICOM_PASSKEY')
    SAFARICOM_SHORTCODE = os.getenv('SAFARICOM_SHORTCODE')
    SAFARICOM_PAYBILL = os.getenv('SAFARICOM_PAYBILL')

    # Externally reachable base URL used to build callback URLs
    CALLBACK_BASE_URL = os.getenv('CALLBACK_BASE_URL')

    # STK push display strings
    SAFARICOM_ACCOUNT_REFERENCE = os.getenv('SAFARICOM_ACCOUNT_REFERENCE', 'Shasa Test')
    SAFARICOM_TRANSACTION_DESC = os.getenv('SAFARICOM_TRANSACTION_DESC', 'Payment for goods n stuff')

    # None means requests waits indefinitely
    SAFARICOM_TIMEOUT = _optional_float(os.getenv('SAFARICOM_TIMEOUT'))


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    TESTING = False


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False
    TESTING = False


class TestingConfig(Config):
    """Testing configuration"""
    TESTING = True
    SAFARICOM_AUTH_URL = 'https://sandbox.safaricom.co.ke/oauth/v1/generate?grant_type=client_credentials'
    SAFARICOM_STK_ENDPOINT = 'https://sandbox.safaricom.co.ke/mpesa/stkpush/v1/processrequest'
    SAFARICOM_REGISTER_PAYBILL = 'https://sandbox.safaricom.co.ke/mpesa/c2b/v1/registerurl'
    SAFARICOM_CONSUMER_KEY = 'test_consumer_key'
    SAFARICOM_CONSUMER_SECRET = 'test_consumer_secret'
    SAFARICOM_PASSKEY = 'test_passkey'
    SAFARICOM_SHORTCODE = '174379'
    SAFARICOM_PAYBILL = '600000'
    CALLBACK_BASE_URL = 'https://example.com'
    SAFARICOM_ACCOUNT_REFERENCE = 'Shasa Test'
    SAFARICOM_TRANSACTION_DESC = 'Payment for goods n stuff'
    SAFARICOM_TIMEOUT = None


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}


@dataclass(frozen=True)
class Credentials:
    """Daraja app credentials and the Lipa na M-Pesa short code."""
    consumer_key: str
    consumer_secret: str
    pass_key: str
    short_code: str


@dataclass(frozen=True)
class DarajaConfig:
    """
    Everything the M-Pesa integration needs, loaded once at startup.

    Instances are immutable and handed to MPesaProvider explicitly; nothing
    downstream reads os.environ.
    """
    credentials: Credentials
    auth_url: str
    stk_push_url: str
    register_url: str
    paybill_number: str
    callback_base_url: str
    account_reference: str = 'Shasa Test'
    transaction_desc: str = 'Payment for goods n stuff'
    timeout: Optional[float] = None

    STK_CALLBACK_PATH = '/payment/safpayment/callback'

    _REQUIRED_KEYS = (
        'SAFARICOM_AUTH_URL',
        'SAFARICOM_STK_ENDPOINT',
        'SAFARICOM_REGISTER_PAYBILL',
        'SAFARICOM_CONSUMER_KEY',
        'SAFARICOM_CONSUMER_SECRET',
        'SAFARICOM_PASSKEY',
        'SAFARICOM_SHORTCODE',
        'CALLBACK_BASE_URL',
    )

    @property
    def stk_callback_url(self) -> str:
        return f'{self.callback_base_url.rstrip("/")}{self.STK_CALLBACK_PATH}'

    @classmethod
    def from_app_config(cls, app_config: Mapping[str, Any]) -> 'DarajaConfig':
        """
        Build the Daraja configuration from a Flask config mapping

        Args:
            app_config: Flask ``app.config`` (or any mapping with the same keys)

        Returns:
            DarajaConfig

        Raises:
            ConfigurationError: If any required key is missing or empty
        """
        missing = [key for key in cls._REQUIRED_KEYS if not app_config.get(key)]
        if missing:
            raise ConfigurationError(f'Missing required configuration: {", ".join(missing)}')

        short_code = str(app_config['SAFARICOM_SHORTCODE'])
        credentials = Credentials(
            consumer_key=app_config['SAFARICOM_CONSUMER_KEY'],
            consumer_secret=app_config['SAFARICOM_CONSUMER_SECRET'],
            pass_key=app_config['SAFARICOM_PASSKEY'],
            short_code=short_code,
        )

        paybill_number = str(app_config.get('SAFARICOM_PAYBILL') or short_code)
        if not paybill_number.isdigit():
            raise ConfigurationError(f'SAFARICOM_PAYBILL must be numeric, got {paybill_number!r}')

        return cls(
            credentials=credentials,
            auth_url=app_config['SAFARICOM_AUTH_URL'],
            stk_push_url=app_config['SAFARICOM_STK_ENDPOINT'],
            register_url=app_config['SAFARICOM_REGISTER_PAYBILL'],
            paybill_number=paybill_number,
            callback_base_url=app_config['CALLBACK_BASE_URL'],
            account_reference=app_config.get('SAFARICOM_ACCOUNT_REFERENCE') or 'Shasa Test',
            transaction_desc=app_config.get('SAFARICOM_TRANSACTION_DESC') or 'Payment for goods n stuff',
            timeout=app_config.get('SAFARICOM_TIMEOUT'),
        )
