import bcrypt
from flask import current_app

from security.otp_errors import OtpHashingError


def hash_code(plain_code: str) -> str:
    if not isinstance(plain_code, str) or len(plain_code) == 0:
        raise OtpHashingError("Code must be a non-empty string")

    rounds = current_app.config.get("OTP_HASH_ROUNDS", 10)
    try:
        # bcrypt expects bytes
        salt = bcrypt.gensalt(rounds=rounds)
        hashed = bcrypt.hashpw(plain_code.encode("utf-8"), salt)
    except (ValueError, TypeError) as exc:
        raise OtpHashingError(str(exc)) from exc
    return hashed.decode("utf-8")


def code_matches(plain_code: str, code_hash: str) -> bool:
    if not plain_code or not code_hash:
        return False
    try:
        return bcrypt.checkpw(
            plain_code.encode("utf-8"),
            code_hash.encode("utf-8")
        )
    except ValueError:
        # malformed stored digest
        return False


_dummy_hashes = {}


def burn_compare(plain_code: str) -> None:
    """
    Runs one bcrypt compare at the configured cost against a throwaway digest,
    so failures without a stored digest take as long as real mismatches.
    """
    rounds = current_app.config.get("OTP_HASH_ROUNDS", 10)
    digest = _dummy_hashes.get(rounds)
    if digest is None:
        digest = hash_code("0" * current_app.config.get("OTP_LENGTH", 6))
        _dummy_hashes[rounds] = digest
    code_matches(plain_code or "0", digest)
