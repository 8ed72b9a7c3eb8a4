from .health import health_bp
from .otp import otp_bp
