"""
Health Check Endpoint
"""

from datetime import datetime, timezone

from flask import Blueprint, jsonify

health_bp = Blueprint('health', __name__)


@health_bp.route('/health', methods=['GET'])
def health_check():
    """
    Liveness check. Does not call Daraja.
    """
    return jsonify({
        'status': 'healthy',
        'timestamp': datetime.now(timezone.utc).isoformat(),
        'service': 'safpay',
        'version': '1.0.0'
    }), 200
