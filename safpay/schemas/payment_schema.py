from marshmallow import EXCLUDE, Schema, fields, validate, validates, ValidationError


class PhoneField(fields.Field):
    """Accepts a phone number sent either as a JSON string or a JSON number"""

    def _deserialize(self, value, attr, data, **kwargs):
        if isinstance(value, bool) or not isinstance(value, (str, int)):
            raise ValidationError('Not a valid phone number.')
        return str(value).strip()


class StkPushRequestSchema(Schema):
    """STK push initiation request; 'ammount' is the public field name"""

    class Meta:
        unknown = EXCLUDE

    # Whole shillings only; fractions fail validation
    ammount = fields.Decimal(required=True)
    phone = PhoneField(required=True, validate=validate.Length(min=1))

    @validates('ammount')
    def validate_amount(self, value, **kwargs):
        if value <= 0:
            raise ValidationError('Amount must be greater than 0')
        if value != value.to_integral_value():
            raise ValidationError('Amount must be a whole number')


class RegisterPaybillSchema(Schema):
    """C2B URL registration request"""

    class Meta:
        unknown = EXCLUDE

    confirmation_url = fields.Str(required=True, validate=validate.Length(min=1))
