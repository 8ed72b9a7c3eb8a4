from datetime import datetime

from models import db
from models.otp import OtpRecord, OtpPurpose


def normalize_email(value: str) -> str:
    return (value or "").strip().lower()


def insert_otp(email: str, purpose: OtpPurpose, code_hash: str, expires_at: datetime = None) -> OtpRecord:
    """
    Appends a new pending record. Older pending records for the same
    (email, purpose) are left in place; lookup simply stops returning them.
    """
    record = OtpRecord(
        email=normalize_email(email),
        purpose=OtpPurpose(purpose).value,
        code_hash=code_hash,
        is_used=False,
        created_at=datetime.utcnow(),
        expires_at=expires_at,
    )
    db.session.add(record)
    db.session.commit()
    return record


def find_latest_unused(email: str, purpose: OtpPurpose):
    return (
        OtpRecord.query
        .filter_by(email=normalize_email(email), purpose=OtpPurpose(purpose).value, is_used=False)
        .order_by(OtpRecord.created_at.desc(), OtpRecord.id.desc())
        .first()
    )


def find_latest(email: str, purpose: OtpPurpose):
    """Newest record for the pair whether used or not; the only one that may ever verify."""
    return (
        OtpRecord.query
        .filter_by(email=normalize_email(email), purpose=OtpPurpose(purpose).value)
        .order_by(OtpRecord.created_at.desc(), OtpRecord.id.desc())
        .first()
    )


def mark_used(record_id: int) -> bool:
    """
    Conditional update: flips is_used only while it is still false.
    Returns True for the single caller whose update hit the row.
    """
    updated = (
        OtpRecord.query
        .filter_by(id=record_id, is_used=False)
        .update({"is_used": True, "used_at": datetime.utcnow()}, synchronize_session=False)
    )
    db.session.commit()
    return updated == 1


def history_for(email: str, limit: int = 50):
    return (
        OtpRecord.query
        .filter_by(email=normalize_email(email))
        .order_by(OtpRecord.created_at.desc(), OtpRecord.id.desc())
        .limit(limit)
        .all()
    )
