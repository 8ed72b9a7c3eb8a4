from datetime import datetime, timedelta
from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from models import db
from models.otp import OtpPurpose
from security.otp_code import generate_code
from security.otp_hash import hash_code
from security.otp_store import insert_otp
from utils.audit import log_event
from utils.emailer import send_otp_email
from utils.settings import get_branding


def _expiry_timestamp():
    ttl = int(current_app.config.get("OTP_TTL_SECONDS", 0) or 0)
    if ttl <= 0:
        return None
    return datetime.utcnow() + timedelta(seconds=ttl)


def _audit(action: str, record, metadata: dict) -> None:
    # record is already committed; a failed audit write must not undo or block it
    record_id, email = record.id, record.email
    try:
        log_event(action, email=email, entity="otp_record", entity_id=record_id, metadata=metadata)
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Audit write %s failed for OTP record %s", action, record_id)


def _dispatch(dispatcher, record, code: str, branding: dict) -> bool:
    try:
        ok, error = dispatcher(
            record.email,
            code,
            branding.get("app_logo", ""),
            branding.get("app_name", ""),
            OtpPurpose(record.purpose),
        )
    except Exception as exc:
        ok, error = False, str(exc)

    if ok:
        return True

    current_app.logger.warning(
        "OTP email to %s failed (%s); issuance kept", record.email, error
    )
    _audit("OTP_DELIVERY_FAIL", record, {"purpose": record.purpose, "error": str(error)[:200]})
    return False


def issue_otp(email: str, purpose: OtpPurpose, branding_provider=get_branding, dispatcher=send_otp_email):
    """
    Generates, hashes and stores a new code, then hands the plaintext to the
    dispatcher. Returns (record, delivered).

    Hashing or storage errors propagate and nothing is sent. Delivery errors
    never undo the stored record.
    """
    purpose = OtpPurpose(purpose)
    code = generate_code()
    code_hash = hash_code(code)

    try:
        record = insert_otp(email, purpose, code_hash, expires_at=_expiry_timestamp())
    except Exception:
        db.session.rollback()
        raise

    _audit("OTP_ISSUED", record, {"purpose": purpose.value})

    try:
        branding = branding_provider() or {}
    except Exception as exc:
        current_app.logger.warning("Branding lookup failed: %s", exc)
        branding = {
            "app_logo": current_app.config.get("DEFAULT_APP_LOGO", ""),
            "app_name": current_app.config.get("DEFAULT_APP_NAME", ""),
        }

    delivered = _dispatch(dispatcher, record, code, branding)
    return record, delivered
