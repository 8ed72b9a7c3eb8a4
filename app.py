import click
from flask import Flask
from config import Config
from routes import health_bp, otp_bp

from models import db
from flask_migrate import Migrate


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)

    # Register routes
    app.register_blueprint(health_bp)
    app.register_blueprint(otp_bp)

    # Database init
    db.init_app(app)

    # Migrations
    Migrate(app, db)

    @app.after_request
    def add_security_headers(resp):
        resp.headers["X-Content-Type-Options"] = "nosniff"
        resp.headers["X-Frame-Options"] = "DENY"
        resp.headers["Referrer-Policy"] = "no-referrer"
        resp.headers["Cache-Control"] = "no-store"
        resp.headers["Content-Security-Policy"] = "default-src 'none'; frame-ancestors 'none';"
        return resp

    register_cli(app)

    return app

#-------------------------
from models.global_setting import GlobalSetting
from security.otp_store import history_for

def register_cli(app):
    @app.cli.command("set-branding")
    @click.option("--name", default=None, help="App name shown in OTP emails.")
    @click.option("--logo", default=None, help="Logo URL shown in OTP emails.")
    def set_branding(name, logo):
        """Create or update the branding used in OTP emails."""
        row = GlobalSetting.query.order_by(GlobalSetting.id.asc()).first()
        if not row:
            row = GlobalSetting()
            db.session.add(row)

        if name is not None:
            row.app_name = name.strip() or None
        if logo is not None:
            row.app_logo = logo.strip() or None
        db.session.commit()

        print(f"Branding set: name={row.app_name!r} logo={row.app_logo!r}")

    @app.cli.command("otp-history")
    @click.argument("email")
    @click.option("--limit", default=20, show_default=True)
    def otp_history(email, limit):
        """List issued codes for an email (no digests)."""
        rows = history_for(email, limit=limit)
        if not rows:
            print("No codes issued")
            return

        for row in rows:
            used = row.used_at.isoformat() if row.used_at else "-"
            print(f"{row.id}\t{row.purpose}\tused={row.is_used}\tcreated={row.created_at.isoformat()}\tused_at={used}")

#-------------------------


if __name__ == "__main__":
    app = create_app()
    # Run locally
    app.run(host="127.0.0.1", port=5002)
