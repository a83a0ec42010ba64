import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker

from app.core.exceptions import DatabaseError, ValidationError
from app.core.validation import Interest
from app.models.subscriber import Subscriber
from app.services.subscriber_store import SubscriberStore
from conftest import naive_utc


def test_upsert_creates_record(db_session, clock):
    store = SubscriberStore(db_session, clock=clock)
    sub = store.upsert("foo@bar.com", [Interest.OIL], "80202", "landing")

    assert sub.id is not None
    assert sub.email == "foo@bar.com"
    assert sub.interests == "oil"
    assert sub.zip == "80202"
    assert sub.source == "landing"
    assert db_session.query(Subscriber).count() == 1


def test_upsert_normalizes_email_key(db_session, clock):
    store = SubscriberStore(db_session, clock=clock)
    first = store.upsert("  Foo@Bar.COM ", ["oil"], None, "landing")
    second = store.upsert("foo@bar.com", ["salt"], None, "landing")

    assert first.id == second.id
    assert second.email == "foo@bar.com"
    assert db_session.query(Subscriber).count() == 1


def test_resubmit_overwrites_payload_and_refreshes_created_at(db_session, clock):
    store = SubscriberStore(db_session, clock=clock)
    original = store.upsert("a@b.com", ["oil"], "80202", "landing")
    original_id = original.id
    original_created = naive_utc(original.created_at)

    updated = store.upsert("a@b.com", ["oil", "salt"], None, "popup")

    assert updated.id == original_id
    assert updated.source == "landing"
    assert updated.interests == "oil, salt"
    assert updated.zip is None
    assert naive_utc(updated.created_at) > original_created


def test_upsert_rejects_empty_interests(db_session, clock):
    store = SubscriberStore(db_session, clock=clock)
    with pytest.raises(ValidationError):
        store.upsert("a@b.com", [], None, "landing")
    assert db_session.query(Subscriber).count() == 0


def test_list_all_most_recent_first(db_session, clock):
    store = SubscriberStore(db_session, clock=clock)
    store.upsert("one@example.com", ["oil"], None, "landing")
    store.upsert("two@example.com", ["salt"], None, "landing")
    store.upsert("three@example.com", ["oil"], None, "landing")
    # Re-submitting bumps "one" back to the top
    store.upsert("one@example.com", ["salt"], None, "landing")

    subscribers = store.list_all()
    assert [s.email for s in subscribers] == [
        "one@example.com",
        "three@example.com",
        "two@example.com",
    ]
    stamps = [naive_utc(s.created_at) for s in subscribers]
    assert stamps == sorted(stamps, reverse=True)


def test_list_all_empty(db_session):
    assert SubscriberStore(db_session).list_all() == []


def test_email_unique_constraint_enforced_by_database(db_session):
    db_session.add(Subscriber(email="dup@example.com", interests="oil", source="landing"))
    db_session.commit()
    db_session.add(Subscriber(email="dup@example.com", interests="salt", source="landing"))
    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()


def test_storage_faults_surface_as_database_error(broken_engine):
    session = sessionmaker(bind=broken_engine)()
    store = SubscriberStore(session)
    try:
        with pytest.raises(DatabaseError):
            store.upsert("a@b.com", ["oil"], None, "landing")
        with pytest.raises(DatabaseError) as exc_info:
            store.list_all()
        assert "subscribers" in exc_info.value.message
    finally:
        session.close()
