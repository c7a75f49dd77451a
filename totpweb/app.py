"""
FLASK APP MAIN ENTRY POINT - TOTP API SERVER
=============================================

Sets up the Flask app, enables CORS for a browser front end on another origin,
loads configuration and registers the OTP blueprint.

Configuration
- defaults below, overridden by TOTPWEB_* environment variables
  (e.g. TOTPWEB_PORT=8080, TOTPWEB_DEBUG=true)
"""
import logging

from flask import Flask, jsonify
from flask_cors import CORS

from totpweb.routes import otp_bp

logger = logging.getLogger(__name__)


def load_config(flask_app: Flask) -> None:
    """Defaults first, then TOTPWEB_* environment variables (values parsed as JSON)."""
    flask_app.config.from_mapping(
        HOST='127.0.0.1',
        PORT=5000,
        DEBUG=False,
    )
    flask_app.config.from_prefixed_env('TOTPWEB')


app = Flask(__name__)
load_config(app)

# Allow a front end served from a different origin to call the API
CORS(app)

app.register_blueprint(otp_bp)


@app.route('/', methods=['GET'])
def index():
    """
    API overview

      curl http://localhost:5000/
    """
    return jsonify({
        "service": "totp",
        "endpoints": {
            "POST /totp": {"secret": "BASE32"},
            "POST /hotp": {"secret": "BASE32", "counter": 0},
            "POST /verify": {"secret": "BASE32", "code": "123456"},
        },
    })


def main():
    logging.basicConfig(
        level=logging.DEBUG if app.config['DEBUG'] else logging.INFO,
        format="[%(levelname)s] %(name)s: %(message)s",
    )
    logger.info("Starting TOTP API on %s:%s", app.config['HOST'], app.config['PORT'])
    app.run(debug=app.config['DEBUG'], host=app.config['HOST'], port=app.config['PORT'])


if __name__ == '__main__':
    main()
