import enum
from datetime import datetime
from models.db import db


class OtpPurpose(str, enum.Enum):
    SIGNUP_VERIFICATION = "SIGNUP_VERIFICATION"
    FORGOT_PASSWORD = "FORGOT_PASSWORD"


class OtpRecord(db.Model):
    __tablename__ = "otp_records"
    __table_args__ = (
        db.Index("ix_otp_records_lookup", "email", "purpose", "is_used"),
    )

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), nullable=False, index=True)
    purpose = db.Column(db.String(32), nullable=False)

    # bcrypt digest, never the plaintext code
    code_hash = db.Column(db.String(128), nullable=False)
    is_used = db.Column(db.Boolean, default=False, nullable=False)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    used_at = db.Column(db.DateTime, nullable=True)
    expires_at = db.Column(db.DateTime, nullable=True)  # null = never expires

    def is_expired(self, now=None) -> bool:
        if self.expires_at is None:
            return False
        return (now or datetime.utcnow()) >= self.expires_at
