"""
Unit Tests for Daraja configuration loading
"""

import dataclasses

import pytest

from safpay import create_app
from safpay.config import DarajaConfig, TestingConfig
from safpay.errors.exceptions import ConfigurationError


def _testing_mapping(**overrides):
    mapping = {key: getattr(TestingConfig, key) for key in dir(TestingConfig) if key.isupper()}
    mapping.update(overrides)
    return mapping


class TestDarajaConfig:

    def test_loads_credentials_and_endpoints(self, daraja_config):
        assert daraja_config.credentials.consumer_key == 'test_consumer_key'
        assert daraja_config.credentials.short_code == '174379'
        assert daraja_config.paybill_number == '600000'
        assert daraja_config.stk_callback_url == 'https://example.com/payment/safpayment/callback'
        assert daraja_config.timeout is None

    def test_is_immutable(self, daraja_config):
        with pytest.raises(dataclasses.FrozenInstanceError):
            daraja_config.auth_url = 'https://evil.example.com'

    def test_missing_keys_are_all_reported(self):
        mapping = _testing_mapping(SAFARICOM_PASSKEY=None, CALLBACK_BASE_URL='')

        with pytest.raises(ConfigurationError) as exc_info:
            DarajaConfig.from_app_config(mapping)

        assert 'SAFARICOM_PASSKEY' in exc_info.value.message
        assert 'CALLBACK_BASE_URL' in exc_info.value.message

    def test_paybill_defaults_to_short_code(self):
        config = DarajaConfig.from_app_config(_testing_mapping(SAFARICOM_PAYBILL=None))
        assert config.paybill_number == '174379'

    def test_non_numeric_paybill_is_rejected(self):
        with pytest.raises(ConfigurationError):
            DarajaConfig.from_app_config(_testing_mapping(SAFARICOM_PAYBILL='PB-1'))

    def test_trailing_slash_on_base_url(self):
        config = DarajaConfig.from_app_config(_testing_mapping(CALLBACK_BASE_URL='https://example.com/'))
        assert config.stk_callback_url == 'https://example.com/payment/safpayment/callback'


class TestCreateApp:

    def test_app_holds_frozen_daraja_config(self, app):
        assert isinstance(app.config['DARAJA'], DarajaConfig)

    def test_startup_fails_without_required_configuration(self, monkeypatch):
        monkeypatch.setattr(TestingConfig, 'SAFARICOM_CONSUMER_KEY', None)

        with pytest.raises(ConfigurationError):
            create_app('testing')
