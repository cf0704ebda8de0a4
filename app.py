import os
import signal
import sys

from safpay import create_app
from safpay.utils.logger import get_logger

logger = get_logger('safpay.server')

app = create_app(os.getenv('FLASK_ENV', 'development'))


def _shutdown(signum, frame):
    logger.info(f'Received {signal.Signals(signum).name}. Shutting down gracefully...')
    sys.exit(0)


if __name__ == '__main__':
    signal.signal(signal.SIGINT, _shutdown)
    signal.signal(signal.SIGTERM, _shutdown)

    port = app.config['PORT']
    logger.info(f'The server is up and listening on port {port}')
    app.run(host='0.0.0.0', port=port, debug=app.config.get('DEBUG', False))
