from flask import Blueprint, request, jsonify, current_app

from models import db
from models.otp import OtpPurpose
from security.otp_errors import OtpError, OtpHashingError, NoPendingCodeError, OtpExpiredError
from security.otp_issuer import issue_otp
from security.otp_verifier import verify_otp


otp_bp = Blueprint("otp", __name__, url_prefix="/otp")


def _is_valid_email(email: str) -> bool:
    return isinstance(email, str) and "@" in email and len(email) <= 255


def _parse_purpose(value):
    try:
        return OtpPurpose(value)
    except ValueError:
        return None


@otp_bp.post("/issue")
def issue():
    data = request.get_json(silent=True) or {}
    email = (data.get("email") or "").strip().lower()
    purpose = _parse_purpose(data.get("purpose"))

    if not _is_valid_email(email):
        return jsonify(error="Invalid email"), 400
    if purpose is None:
        return jsonify(error="Invalid purpose"), 400

    try:
        issue_otp(email, purpose)
    except OtpHashingError:
        current_app.logger.exception("OTP hashing failed")
        return jsonify(error="Could not issue code"), 500
    except Exception:
        db.session.rollback()
        current_app.logger.exception("OTP issuance failed")
        return jsonify(error="Could not issue code"), 500

    # the code itself only travels by email
    return jsonify(issued=True), 200


@otp_bp.post("/verify")
def verify():
    data = request.get_json(silent=True) or {}
    email = (data.get("email") or "").strip().lower()
    purpose = _parse_purpose(data.get("purpose"))
    code = data.get("code")
    if isinstance(code, int) and not isinstance(code, bool):
        code = str(code)

    if not _is_valid_email(email):
        return jsonify(error="Invalid email"), 400
    if purpose is None:
        return jsonify(error="Invalid purpose"), 400
    if not isinstance(code, str) or not code.strip().isdigit():
        return jsonify(error="Invalid code"), 400

    try:
        verify_otp(email, purpose, code.strip())
    except (NoPendingCodeError, OtpExpiredError):
        return jsonify(error="Invalid or expired code"), 400
    except OtpError:
        return jsonify(error="Invalid code"), 400

    return jsonify(verified=True), 200
