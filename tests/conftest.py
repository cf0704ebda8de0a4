"""
Pytest Configuration and Fixtures
"""
import json
import os
import tempfile
from unittest.mock import Mock

import pytest

os.environ.setdefault('LOG_DIR', tempfile.mkdtemp(prefix='safpay-logs-'))

from safpay import create_app
from safpay.config import DarajaConfig, TestingConfig
from safpay.providers.mpesa_provider import MPesaProvider


def mock_http_response(json_data=None, status_code=200, text=None):
    """Return a mock requests.Response whose .json() returns json_data."""
    resp = Mock()
    resp.ok = 200 <= status_code < 400
    resp.status_code = status_code
    if json_data is None:
        resp.json.side_effect = ValueError('No JSON object could be decoded')
        resp.text = text or ''
    else:
        resp.json.return_value = json_data
        resp.text = json.dumps(json_data)
    return resp


@pytest.fixture
def token_response():
    return mock_http_response({'access_token': 'daraja_tok_abc', 'expires_in': '3599'})


@pytest.fixture
def app():
    """Create application for testing"""
    app = create_app('testing')

    ctx = app.app_context()
    ctx.push()

    yield app

    ctx.pop()


@pytest.fixture
def client(app):
    """Create a test client"""
    return app.test_client()


@pytest.fixture
def daraja_config():
    app_config = {
        key: getattr(TestingConfig, key)
        for key in dir(TestingConfig)
        if key.isupper()
    }
    return DarajaConfig.from_app_config(app_config)


@pytest.fixture
def provider(daraja_config):
    return MPesaProvider(daraja_config)


@pytest.fixture
def stk_success_payload():
    return {
        'Body': {
            'stkCallback': {
                'MerchantRequestID': '29115-34620561-1',
                'CheckoutRequestID': 'ws_CO_191220191020363925',
                'ResultCode': 0,
                'ResultDesc': 'The service request is processed successfully.',
                'CallbackMetadata': {
                    'Item': [
                        {'Name': 'Amount', 'Value': 500},
                        {'Name': 'MpesaReceiptNumber', 'Value': 'ABC123'},
                        {'Name': 'Balance'},
                        {'Name': 'TransactionDate', 'Value': 20240115103000},
                        {'Name': 'PhoneNumber', 'Value': 254712345678}
                    ]
                }
            }
        }
    }


@pytest.fixture
def stk_cancelled_payload():
    return {
        'Body': {
            'stkCallback': {
                'MerchantRequestID': '29115-34620561-1',
                'CheckoutRequestID': 'ws_CO_191220191020363925',
                'ResultCode': 1032,
                'ResultDesc': 'Request cancelled by user'
            }
        }
    }


@pytest.fixture
def paybill_payload():
    return {
        'TransactionType': 'Pay Bill',
        'TransID': 'XYZ',
        'TransTime': '20240115103000',
        'TransAmount': '750',
        'BusinessShortCode': '600000',
        'BillRefNumber': 'ACCT-00123',
        'InvoiceNumber': '',
        'OrgAccountBalance': '49197.00',
        'ThirdPartyTransID': '',
        'MSISDN': 'hash1',
        'FirstName': 'Jane',
        'MiddleName': '',
        'LastName': 'Doe'
    }
