"""
Unit Tests for Daraja request signing and timestamp decoding
"""

import base64
from datetime import datetime

import pytest

from safpay.errors.exceptions import MalformedCallbackError
from safpay.providers.signing import (
    decode_timestamp,
    generate_password,
    generate_timestamp,
    sign_request,
)


class TestGenerateTimestamp:

    def test_format_is_fourteen_digits(self):
        timestamp = generate_timestamp()
        assert len(timestamp) == 14
        assert timestamp.isdigit()

    def test_zero_pads_every_component(self):
        assert generate_timestamp(datetime(2024, 1, 5, 3, 4, 9)) == '20240105030409'

    def test_month_is_one_based(self):
        assert generate_timestamp(datetime(2024, 12, 31, 23, 59, 59)) == '20241231235959'

    @pytest.mark.parametrize('instant', [
        datetime(2024, 1, 15, 10, 30, 0),
        datetime(1999, 12, 31, 23, 59, 59),
        datetime(2030, 2, 28, 0, 0, 1),
    ])
    def test_decode_reproduces_encoded_instant(self, instant):
        assert decode_timestamp(generate_timestamp(instant)) == instant

    def test_current_time_round_trips_to_the_second(self):
        now = datetime.now().replace(microsecond=0)
        assert decode_timestamp(generate_timestamp(now)) == now


class TestGeneratePassword:

    def test_matches_daraja_scheme(self):
        password = generate_password('174379', 'passkey', '20240115103000')
        assert base64.b64decode(password).decode('utf-8') == '174379passkey20240115103000'

    def test_is_deterministic(self):
        first = generate_password('174379', 'passkey', '20240115103000')
        second = generate_password('174379', 'passkey', '20240115103000')
        assert first == second

    @pytest.mark.parametrize('args', [
        ('174380', 'passkey', '20240115103000'),
        ('174379', 'passkey2', '20240115103000'),
        ('174379', 'passkey', '20240115103001'),
    ])
    def test_changing_any_input_changes_output(self, args):
        baseline = generate_password('174379', 'passkey', '20240115103000')
        assert generate_password(*args) != baseline

    def test_sign_request_embeds_its_own_timestamp(self):
        signature = sign_request('174379', 'passkey', datetime(2024, 1, 15, 10, 30, 0))

        assert signature.timestamp == '20240115103000'
        assert signature.password == generate_password('174379', 'passkey', '20240115103000')


class TestDecodeTimestamp:

    def test_decodes_string(self):
        assert decode_timestamp('20240115103000') == datetime(2024, 1, 15, 10, 30, 0)

    def test_decodes_integer(self):
        assert decode_timestamp(20240115103000) == datetime(2024, 1, 15, 10, 30, 0)

    @pytest.mark.parametrize('value', [
        None,
        '',
        '2024011510300',
        '202401151030000',
        '2024O115103000',
        '20241315103000',
        '20240230103000',
        True,
    ])
    def test_rejects_malformed_values(self, value):
        with pytest.raises(MalformedCallbackError):
            decode_timestamp(value)
