class OtpError(Exception):
    """Base class for OTP failures."""


class OtpHashingError(OtpError):
    """Raised when a code could not be hashed; issuance must not continue."""


class NoPendingCodeError(OtpError):
    """Raised when no unused code exists for the (email, purpose) pair."""


class CodeMismatchError(OtpError):
    """Raised when the code is wrong or the pending record was consumed concurrently."""


class OtpExpiredError(OtpError):
    """Raised when the newest pending code is past its expiry."""
