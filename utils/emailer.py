import smtplib
from email.message import EmailMessage

from flask import current_app

from models.otp import OtpPurpose


def send_email(to_email: str, subject: str, body: str, html: str = None):
    host = current_app.config.get("SMTP_HOST")
    port = current_app.config.get("SMTP_PORT", 587)
    username = current_app.config.get("SMTP_USERNAME")
    password = current_app.config.get("SMTP_PASSWORD")
    from_email = current_app.config.get("SMTP_FROM_EMAIL") or username
    use_tls = current_app.config.get("SMTP_USE_TLS", True)

    if not host or not from_email:
        return False, "Email not configured"

    msg = EmailMessage()
    msg["From"] = from_email
    msg["To"] = to_email
    msg["Subject"] = subject
    msg.set_content(body)
    if html:
        msg.add_alternative(html, subtype="html")

    try:
        with smtplib.SMTP(host, port, timeout=10) as server:
            if use_tls:
                server.starttls()
            if username and password:
                server.login(username, password)
            server.send_message(msg)
        return True, None
    except Exception as exc:
        return False, str(exc)


def _otp_email_html(heading: str, intro: str, code: str, app_logo: str, app_name: str) -> str:
    logo = f'<img src="{app_logo}" alt="{app_name}" style="max-height: 48px;">' if app_logo else ""
    return f"""
    <!DOCTYPE html>
    <html>
    <head><meta charset="utf-8"><title>{heading}</title></head>
    <body style="font-family: system-ui, sans-serif; max-width: 480px; margin: 0 auto; padding: 24px;">
        {logo}
        <h2 style="color: #1a1a2e;">{heading}</h2>
        <p>{intro}</p>
        <p style="font-size: 28px; font-weight: bold; letter-spacing: 6px; color: #16213e;">{code}</p>
        <p style="color: #666;">Do not share this code with anyone.</p>
        <hr style="border: none; border-top: 1px solid #eee; margin: 24px 0;">
        <p style="font-size: 12px; color: #999;">If you did not request this, you can ignore this email. - {app_name}</p>
    </body>
    </html>
    """


def send_otp_email(to_email: str, code: str, app_logo: str, app_name: str, purpose: OtpPurpose):
    if purpose == OtpPurpose.FORGOT_PASSWORD:
        heading = "Reset Your Password"
        intro = f"Use the code below to reset your {app_name} password:"
    else:
        heading = "Verify Your Email Address"
        intro = f"Use the code below to verify your email for {app_name}:"

    subject = f"{heading} - {app_name}" if app_name else heading
    body = f"{intro}\n\n{code}\n\nDo not share this code with anyone."
    html = _otp_email_html(heading, intro, code, app_logo, app_name)
    return send_email(to_email, subject, body, html=html)
