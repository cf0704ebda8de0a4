"""
Safaricom Payment Endpoints
STK push initiation, Daraja callbacks and C2B URL registration
"""

from flask import Blueprint, request, jsonify
from marshmallow import ValidationError as SchemaValidationError

from safpay.errors.exceptions import ValidationError
from safpay.schemas.payment_schema import RegisterPaybillSchema, StkPushRequestSchema
from safpay.services.callback_service import CallbackService
from safpay.services.payment_service import PaymentService
from safpay.utils.logger import get_logger

safpayment_bp = Blueprint('safpayment', __name__)
logger = get_logger(__name__)

stk_push_schema = StkPushRequestSchema()
register_paybill_schema = RegisterPaybillSchema()


def _json_body():
    return request.get_json(silent=True)


@safpayment_bp.route('/stkpush', methods=['POST'])
def stk_push():
    """
    Send an STK push prompt to the payer's phone

    Body:
        {
            "ammount": 100,
            "phone": "254712345678"
        }

    Returns 201 with Daraja's acknowledgment. The payment outcome arrives
    later on /callback.
    """
    try:
        data = stk_push_schema.load(_json_body() or {})
    except SchemaValidationError as e:
        raise ValidationError('Amount and phone number are required.', details=e.messages) from e

    result = PaymentService.initiate_stk_push(
        amount=data['ammount'],
        phone=data['phone']
    )

    return jsonify({
        'status': result.status,
        'details': result.details
    }), 201


@safpayment_bp.route('/callback', methods=['POST'])
def stk_callback():
    """
    Receive the STK push result from Daraja

    Always acknowledged with {"status": "success"}; the acknowledgment is a
    transport ack, not a statement about the payment.
    """
    CallbackService.handle_push_result(_json_body())
    return jsonify({'status': 'success'}), 200


@safpayment_bp.route('/paybillcallback', methods=['POST'])
def paybill_callback():
    """Receive a C2B paybill confirmation from Daraja"""
    payment_data = CallbackService.handle_direct_payment(_json_body())
    return jsonify({'paymentData': payment_data}), 200


@safpayment_bp.route('/registerpaybill', methods=['POST'])
def register_paybill():
    """
    Register the C2B confirmation/validation URL

    Body:
        {
            "confirmation_url": "https://example.com/payment/safpayment/paybillcallback"
        }
    """
    try:
        data = register_paybill_schema.load(_json_body() or {})
    except SchemaValidationError as e:
        raise ValidationError('No url provided in register paybill endpoint', details=e.messages) from e

    result = PaymentService.register_paybill_urls(data['confirmation_url'])

    if result.success:
        return jsonify({'status': 'success', 'details': result.details}), 200

    return jsonify({'status': 'error', 'details': result.details}), 400
