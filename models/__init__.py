from .db import db
from .otp import OtpRecord, OtpPurpose
from .global_setting import GlobalSetting
from .audit_log import AuditLog
