from datetime import datetime
from models.db import db


class GlobalSetting(db.Model):
    __tablename__ = "global_settings"

    id = db.Column(db.Integer, primary_key=True)
    app_name = db.Column(db.String(120), nullable=True)
    app_logo = db.Column(db.String(500), nullable=True)  # URL shown in outgoing emails

    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
