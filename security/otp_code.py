import secrets
from flask import current_app


def generate_code(length: int = None) -> str:
    """
    Uniform random numeric code, zero-padded to `length` digits.
    Collisions between calls are allowed; lookup always takes the newest record.
    """
    if length is None:
        length = current_app.config.get("OTP_LENGTH", 6)
    if length < 4:
        raise ValueError("OTP length must be at least 4 digits")
    return f"{secrets.randbelow(10 ** length):0{length}d}"
