"""
Branding lookup for outgoing OTP emails.
"""
from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from models.global_setting import GlobalSetting


def get_branding() -> dict:
    """
    Returns {"app_logo": ..., "app_name": ...}. Missing or blank values fall
    back to DEFAULT_APP_LOGO / DEFAULT_APP_NAME.
    """
    default_logo = current_app.config.get("DEFAULT_APP_LOGO", "")
    default_name = current_app.config.get("DEFAULT_APP_NAME", "")

    try:
        row = GlobalSetting.query.order_by(GlobalSetting.id.asc()).first()
    except SQLAlchemyError as exc:
        current_app.logger.warning("Could not read global settings: %s", exc)
        row = None

    return {
        "app_logo": (row.app_logo if row and row.app_logo else default_logo),
        "app_name": (row.app_name if row and row.app_name else default_name),
    }
