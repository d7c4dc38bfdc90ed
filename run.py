"""
Stockbook inventory service
Entry point for the Flask application - Development Only

For production, use wsgi.py with a production server like Gunicorn
"""
import os
from pathlib import Path

# Load environment variables from .env file
if Path('.env').exists():
    from dotenv import load_dotenv
    load_dotenv()

from stockbook import create_app
from config import get_config

if __name__ == '__main__':
    os.makedirs('instance', exist_ok=True)

    config_class = get_config()
    app = create_app(config_class)

    debug = os.environ.get('FLASK_DEBUG', 'true').lower() in ('true', '1', 'yes')
    host = os.environ.get('FLASK_HOST', '0.0.0.0')
    port = int(os.environ.get('FLASK_PORT', 5000))

    app.logger.info("Starting Stockbook - %s on %s:%s (debug=%s)", config_class.__name__, host, port, debug)
    app.run(debug=debug, host=host, port=port)
