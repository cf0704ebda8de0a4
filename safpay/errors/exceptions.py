class AppError(Exception):
    status_code = 500
    error = "Application error"

    def __init__(self, message, status_code=None, details=None):
        super().__init__(message)
        if status_code:
            self.status_code = status_code
        self.message = message
        self.details = details


class ValidationError(AppError):
    status_code = 400
    error = "Validation error"


class UpstreamAuthError(AppError):
    status_code = 400
    error = "Upstream authentication error"


class UpstreamPaymentError(AppError):
    status_code = 500
    error = "Upstream payment error"


class MalformedResponseError(AppError):
    status_code = 502
    error = "Malformed provider response"


class MalformedCallbackError(AppError):
    status_code = 400
    error = "Malformed callback payload"


class ConfigurationError(AppError):
    status_code = 500
    error = "Configuration error"
