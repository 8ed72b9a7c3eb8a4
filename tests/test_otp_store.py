from datetime import datetime, timedelta

from models import db
from models.otp import OtpRecord, OtpPurpose
from security.otp_store import insert_otp, find_latest, find_latest_unused, mark_used, history_for

SIGNUP = OtpPurpose.SIGNUP_VERIFICATION
FORGOT = OtpPurpose.FORGOT_PASSWORD


def test_insert_creates_pending_record(app):
    record = insert_otp("  A@X.com ", SIGNUP, "digest-1")

    assert record.id is not None
    assert record.email == "a@x.com"
    assert record.purpose == "SIGNUP_VERIFICATION"
    assert record.is_used is False
    assert record.used_at is None
    assert record.created_at is not None


def test_latest_unused_prefers_newest(app):
    older = insert_otp("a@x.com", SIGNUP, "digest-old")
    newer = insert_otp("a@x.com", SIGNUP, "digest-new")

    assert find_latest_unused("a@x.com", SIGNUP).id == newer.id
    # older record is kept, only shadowed
    assert db.session.get(OtpRecord, older.id).is_used is False


def test_latest_unused_orders_by_created_at(app):
    first = insert_otp("a@x.com", SIGNUP, "digest-1")
    second = insert_otp("a@x.com", SIGNUP, "digest-2")
    second.created_at = first.created_at - timedelta(minutes=5)
    db.session.commit()

    assert find_latest_unused("a@x.com", SIGNUP).id == first.id


def test_lookup_is_scoped_by_purpose_and_email(app):
    insert_otp("a@x.com", FORGOT, "digest")

    assert find_latest_unused("a@x.com", SIGNUP) is None
    assert find_latest_unused("b@x.com", FORGOT) is None
    assert find_latest_unused("A@X.COM", FORGOT) is not None


def test_lookup_skips_used_records(app):
    older = insert_otp("a@x.com", SIGNUP, "digest-old")
    newer = insert_otp("a@x.com", SIGNUP, "digest-new")
    assert mark_used(newer.id) is True

    # once the newest is consumed the next newest pending record is returned
    assert find_latest_unused("a@x.com", SIGNUP).id == older.id


def test_mark_used_succeeds_once(app):
    record = insert_otp("a@x.com", SIGNUP, "digest")

    assert mark_used(record.id) is True
    assert mark_used(record.id) is False

    stored = db.session.get(OtpRecord, record.id)
    assert stored.is_used is True
    assert stored.used_at is not None


def test_mark_used_unknown_record(app):
    assert mark_used(9999) is False


def test_history_lists_newest_first(app):
    first = insert_otp("a@x.com", SIGNUP, "d1")
    second = insert_otp("a@x.com", FORGOT, "d2")
    insert_otp("other@x.com", SIGNUP, "d3")

    rows = history_for("a@x.com")
    assert [r.id for r in rows] == [second.id, first.id]


def test_expiry_flag(app):
    record = insert_otp("a@x.com", SIGNUP, "digest", expires_at=datetime.utcnow() - timedelta(seconds=1))
    assert record.is_expired() is True

    record = insert_otp("a@x.com", SIGNUP, "digest")
    assert record.is_expired() is False


def test_find_latest_includes_used_records(app):
    insert_otp("a@x.com", SIGNUP, "digest-old")
    newer = insert_otp("a@x.com", SIGNUP, "digest-new")
    mark_used(newer.id)

    assert find_latest("a@x.com", SIGNUP).id == newer.id
    assert find_latest("a@x.com", FORGOT) is None
