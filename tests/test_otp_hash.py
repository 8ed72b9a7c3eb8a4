import pytest

from security.otp_errors import OtpHashingError
from security.otp_hash import hash_code, code_matches


def test_digest_is_not_the_plaintext(app):
    digest = hash_code("482913")
    assert digest != "482913"
    assert "482913" not in digest
    assert digest.startswith("$2")


def test_digests_are_salted(app):
    assert hash_code("482913") != hash_code("482913")


def test_matches_only_the_original_code(app):
    digest = hash_code("482913")
    assert code_matches("482913", digest) is True
    assert code_matches("482914", digest) is False


def test_malformed_or_empty_input_never_matches(app):
    assert code_matches("482913", "not-a-bcrypt-hash") is False
    assert code_matches("", hash_code("482913")) is False
    assert code_matches("482913", "") is False


def test_hashing_empty_code_fails(app):
    with pytest.raises(OtpHashingError):
        hash_code("")


def test_hashing_with_invalid_cost_fails(app):
    app.config["OTP_HASH_ROUNDS"] = 2
    with pytest.raises(OtpHashingError):
        hash_code("482913")


def test_burn_compare_reuses_one_digest_per_cost(app, monkeypatch):
    import security.otp_hash as otp_hash

    monkeypatch.setattr(otp_hash, "_dummy_hashes", {})
    otp_hash.burn_compare("482913")
    otp_hash.burn_compare("")

    assert list(otp_hash._dummy_hashes) == [app.config["OTP_HASH_ROUNDS"]]
