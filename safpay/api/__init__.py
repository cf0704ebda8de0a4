"""
API Blueprints Package
Registers all API blueprints
"""

from safpay.api.safpayment import safpayment_bp
from safpay.api.health import health_bp

__all__ = [
    'safpayment_bp',
    'health_bp'
]


def register_blueprints(app):
    """
    Register all blueprints with the Flask app

    Args:
        app: Flask application instance
    """

    url_base: str = '/payment'

    app.register_blueprint(safpayment_bp, url_prefix=f'{url_base}/safpayment')
    app.register_blueprint(health_bp, url_prefix=url_base)
