from typing import Optional

from flask import current_app

from safpay.config import DarajaConfig
from safpay.providers.mpesa_provider import MPesaProvider


def get_provider(config: Optional[DarajaConfig] = None) -> MPesaProvider:
    """
    Get an M-Pesa provider bound to the application's Daraja configuration.

    Args:
        config: Explicit configuration; defaults to the one loaded by create_app

    Returns:
        MPesaProvider
    """
    if config is None:
        config = current_app.config['DARAJA']
    return MPesaProvider(config)


__all__ = ['get_provider', 'MPesaProvider']
