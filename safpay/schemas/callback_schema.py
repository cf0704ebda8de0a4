"""
Callback Validation Schemas
"""

from marshmallow import EXCLUDE, Schema, fields


class PaybillCallbackSchema(Schema):
    """C2B paybill confirmation payload; Daraja sends more keys than we read"""

    class Meta:
        unknown = EXCLUDE

    TransID = fields.Str(allow_none=True)
    TransTime = fields.Raw(required=True, allow_none=False)
    BillRefNumber = fields.Str(allow_none=True)
    FirstName = fields.Str(allow_none=True)
    LastName = fields.Str(allow_none=True)
    TransAmount = fields.Float(allow_none=True)
    MSISDN = fields.Str(allow_none=True)


class PaymentResultSchema(Schema):
    """Normalized payment record as returned to the provider and logged"""
    payment_id = fields.Str(dump_only=True)
    merchant_request_id = fields.Str(dump_only=True)
    date = fields.DateTime(dump_only=True)
    service_provider = fields.Str(dump_only=True)
    service_provider_ref = fields.Str(dump_only=True)
    provider_receipt_id = fields.Str(dump_only=True)
    customer_id = fields.Str(dump_only=True)
    customer_name = fields.Str(dump_only=True)
    amount = fields.Float(dump_only=True)
    service_provided = fields.Str(dump_only=True)
    description = fields.Str(dump_only=True)
    result_desc = fields.Str(dump_only=True)
    payment_status = fields.Method('get_payment_status', dump_only=True)
    hashedPhoneNumber = fields.Str(attribute='phone_number', dump_only=True)

    def get_payment_status(self, obj):
        return obj.status.value
