"""
TOTP API ROUTES - FLASK BLUEPRINT

Every endpoint takes the Base32 secret in the JSON body, computes with the
current wall-clock time and forgets the secret again.

EXAMPLES:
curl -X POST http://localhost:5000/totp -H "Content-Type: application/json" -d '{"secret": "JBSWY3DPEHPK3PXP"}'
curl -X POST http://localhost:5000/verify -H "Content-Type: application/json" -d '{"secret": "JBSWY3DPEHPK3PXP", "code": "123456"}'
"""

import logging

from flask import Blueprint, jsonify, request

from totpcore import otp_core
from totpcore.errors import CryptoError, InvalidSecret

logger = logging.getLogger(__name__)

otp_bp = Blueprint('otp', __name__)

GENERATION_ERROR = "Invalid secret or generation error"
VERIFY_ERROR = "Verification failed or invalid secret"


def _json_body() -> dict:
    """JSON object from the request; anything else (form data, lists, numbers) reads as {}."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return {}
    return data


def _field(data: dict, name: str) -> str:
    """String field from the JSON body, trimmed like the input boxes do."""
    value = data.get(name)
    if not isinstance(value, str):
        return ''
    return value.strip()


@otp_bp.errorhandler(InvalidSecret)
def handle_invalid_secret(e):
    logger.info("Rejected request with invalid secret")
    return jsonify({"error": GENERATION_ERROR}), 400


@otp_bp.errorhandler(CryptoError)
def handle_crypto_error(e):
    # only reachable if the signing primitive itself fails; empty keys are
    # already rejected as InvalidSecret
    logger.error("HMAC-SHA1 failure: %s", e)
    return jsonify({"error": "Signing failed"}), 500


@otp_bp.route('/totp', methods=['POST'])
def get_totp():
    """
    CURRENT TOTP CODE

      curl -X POST http://localhost:5000/totp -H "Content-Type: application/json" -d '{"secret": "JBSWY3DPEHPK3PXP"}'

    Output:
      {"code": "492039", "remaining": 17}
    """
    data = _json_body()
    secret = _field(data, 'secret')
    if not secret:
        return jsonify({"error": "Secret is required"}), 400

    code, remaining = otp_core.totp(secret, otp_core.current_millis())
    return jsonify({"code": code, "remaining": remaining})


@otp_bp.route('/hotp', methods=['POST'])
def get_hotp():
    """
    HOTP CODE FOR A GIVEN COUNTER

      curl -X POST http://localhost:5000/hotp -H "Content-Type: application/json" -d '{"secret": "GEZDGNBVGY3TQOJQ", "counter": 1}'

    Input (JSON body):
      secret: REQUIRED - Base32 secret
      counter: REQUIRED - non-negative integer
    """
    data = _json_body()
    secret = _field(data, 'secret')
    counter = data.get('counter')
    if not secret or counter is None:
        return jsonify({"error": "Secret and counter are required"}), 400
    if isinstance(counter, bool) or not isinstance(counter, int) or counter < 0:
        return jsonify({"error": "Counter must be a non-negative integer"}), 400

    key = otp_core.decode_secret(secret)
    try:
        code = otp_core.hotp(key, counter)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    return jsonify({"code": code})


@otp_bp.route('/verify', methods=['POST'])
def verify_totp_route():
    """
    VERIFY A TOTP CODE

      curl -X POST http://localhost:5000/verify -H "Content-Type: application/json" -d '{"secret": "JBSWY3DPEHPK3PXP", "code": "123456"}'

    Accepts the codes of the previous, current and next 30s period.

    Output:
      {"valid": true, "label": "Code is valid"}
      {"valid": false, "label": "Code is NOT valid"}
    """
    data = _json_body()
    secret = _field(data, 'secret')
    code = _field(data, 'code')
    if not secret:
        return jsonify({"error": "Enter secret to verify against"}), 400
    if not code:
        return jsonify({"error": "Enter code to verify"}), 400

    try:
        valid = otp_core.verify(secret, code, otp_core.current_millis())
    except InvalidSecret:
        logger.info("Rejected verification with invalid secret")
        return jsonify({"error": VERIFY_ERROR}), 400
    if not valid:
        logger.info("TOTP verification failed")
    return jsonify({"valid": valid, "label": otp_core.verify_label(valid)})
