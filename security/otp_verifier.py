from flask import current_app

from models.otp import OtpPurpose
from security.otp_errors import NoPendingCodeError, CodeMismatchError, OtpExpiredError
from security.otp_hash import code_matches, burn_compare
from security.otp_store import find_latest, find_latest_unused, mark_used, normalize_email
from utils.audit import log_event


def _fail(email, purpose, reason, record=None):
    log_event(
        "OTP_VERIFY_FAIL",
        email=email,
        entity="otp_record" if record else None,
        entity_id=record.id if record else None,
        metadata={"purpose": purpose.value, "reason": reason},
    )


def verify_otp(email: str, purpose: OtpPurpose, code: str) -> bool:
    """
    Checks `code` against the newest pending record for (email, purpose) and
    consumes it. Returns True once; raises an OtpError subclass otherwise.

    Only the newest record ever issued for the pair can verify. Once it is
    consumed, older pending records stay void. A wrong code leaves the record
    pending so the user can retry.
    """
    purpose = OtpPurpose(purpose)
    email = normalize_email(email)
    code = str(code or "")

    latest = find_latest(email, purpose)
    if not latest:
        burn_compare(code)
        _fail(email, purpose, "no_pending_code")
        raise NoPendingCodeError("Invalid or expired code")

    record = find_latest_unused(email, purpose)
    if not record or record.id != latest.id:
        # newest code already consumed; reported like a wrong code
        burn_compare(code)
        _fail(email, purpose, "already_used", latest)
        raise CodeMismatchError("Invalid code")

    if record.is_expired():
        burn_compare(code)
        _fail(email, purpose, "expired", record)
        raise OtpExpiredError("Invalid or expired code")

    if not code_matches(code, record.code_hash):
        _fail(email, purpose, "mismatch", record)
        raise CodeMismatchError("Invalid code")

    if not mark_used(record.id):
        current_app.logger.info("OTP record %s consumed by a concurrent verification", record.id)
        log_event("OTP_VERIFY_RACE_LOST", email=email, entity="otp_record", entity_id=record.id,
                  metadata={"purpose": purpose.value})
        # same signal as a wrong code
        raise CodeMismatchError("Invalid code")

    log_event("OTP_VERIFY_SUCCESS", email=email, entity="otp_record", entity_id=record.id,
              metadata={"purpose": purpose.value})
    return True
