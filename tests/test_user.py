"""Tests for lexaid/models/user.py and the subscription date helpers."""

from datetime import datetime

import pytest

from lexaid.config.database import db_instance
from lexaid.models.user import TRIAL_PLAN_NAME, User
from lexaid.utils.errors import ServiceUnavailableError, ValidationError
from lexaid.utils.timestamps import add_months, parse_date, server_timestamp


# ── Profiles ──────────────────────────────────────────────────────────────


def test_new_profile_starts_on_trial(app):
    user = User.create_profile('ada@example.com', 'secret123')

    stored = User.find_by_id(user.id)
    assert stored.display_name == 'ada'
    assert stored.subscription_plan == TRIAL_PLAN_NAME
    assert stored.subscription_status == 'active'
    assert stored.subscription_end_date == add_months(stored.subscription_start_date, 1)
    assert stored.check_password('secret123')
    assert not stored.check_password('wrong')


def test_duplicate_email_rejected(app):
    User.create_profile('ada@example.com', 'secret123')
    with pytest.raises(ValidationError):
        User.create_profile('ada@example.com', 'other456')


def test_ensure_subscription_backfills_trial(app, db):
    result = db.users.insert_one({'email': 'old@example.com', 'password_hash': None})
    user = User.find_by_id(result.inserted_id)
    assert user.subscription_plan is None

    user.ensure_subscription()

    stored = User.find_by_id(user.id)
    assert stored.subscription_plan == TRIAL_PLAN_NAME
    assert stored.last_modified is not None


def test_ensure_subscription_keeps_existing_plan(app):
    user = User.create_profile('ada@example.com', 'secret123')
    User.update_subscription(user.id, 'LexAid Pro', 'pro', 'tx-1', monthly=True)
    before = User.find_by_id(user.id)

    before.ensure_subscription()

    after = User.find_by_id(user.id)
    assert after.subscription_plan == 'LexAid Pro'
    assert after.last_modified == before.last_modified


def test_clean_settings_only_keeps_profile_fields(app):
    user = User.create_profile('ada@example.com', 'secret123')

    updates = User.clean_settings({
        'display_name': '  Ada Obi ',
        'email_notifications': 0,
        'subscription_plan': 'Free Forever',
    })
    updated = User.update_profile(user.id, updates)

    assert updates == {'display_name': 'Ada Obi', 'email_notifications': False}
    assert updated.display_name == 'Ada Obi'
    assert updated.email_notifications is False
    assert updated.subscription_plan == TRIAL_PLAN_NAME


def test_clean_settings_rejects_blank_display_name():
    with pytest.raises(ValidationError):
        User.clean_settings({'display_name': '   '})


def test_check_new_email(app):
    User.create_profile('taken@example.com', 'secret123')
    user = User.create_profile('ada@example.com', 'secret123')

    assert user.check_new_email('ada@example.com') is False
    assert user.check_new_email('new@example.com') is True
    with pytest.raises(ValidationError):
        user.check_new_email('taken@example.com')
    with pytest.raises(ValidationError):
        user.check_new_email('not-an-email')
    assert User.find_by_id(user.id).email == 'ada@example.com'


def test_find_by_subscription_id(app):
    user = User.create_profile('ada@example.com', 'secret123')
    User.update_subscription(user.id, 'LexAid Basic', 'basic', '77', monthly=True)

    assert User.find_by_subscription_id(77).id == user.id
    assert User.find_by_subscription_id('78') is None


# ── Subscriptions ─────────────────────────────────────────────────────────


def test_monthly_subscription_sets_end_date(app):
    user = User.create_profile('ada@example.com', 'secret123')

    updated = User.update_subscription(user.id, 'LexAid Basic', 'basic', 'tx-42', monthly=True)

    assert updated.subscription_plan == 'LexAid Basic'
    assert updated.subscription_plan_id == 'basic'
    assert updated.subscription_id == 'tx-42'
    assert updated.subscription_end_date == add_months(updated.subscription_start_date, 1)


def test_non_monthly_subscription_clears_end_date(app, db):
    user = User.create_profile('ada@example.com', 'secret123')

    updated = User.update_subscription(user.id, 'Enterprise', 'enterprise', 'tx-7')

    assert updated.subscription_end_date is None
    assert 'subscription_end_date' not in db.users.find_one({'email': 'ada@example.com'})


# ── Dates ─────────────────────────────────────────────────────────────────


def test_add_months_clamps_to_month_end():
    assert add_months(datetime(2024, 1, 31, 9, 30)) == datetime(2024, 2, 29, 9, 30)
    assert add_months(datetime(2023, 12, 15)) == datetime(2024, 1, 15)
    assert add_months(datetime(2024, 3, 31), 13) == datetime(2025, 4, 30)


def test_server_timestamp_strictly_increases():
    stamps = [server_timestamp() for _ in range(50)]
    assert all(a < b for a, b in zip(stamps, stamps[1:]))
    assert all(stamp.microsecond % 1000 == 0 for stamp in stamps)


def test_parse_date():
    assert parse_date('') is None
    assert parse_date(None) is None
    assert parse_date('2024-07-15T09:00:00Z') == datetime(2024, 7, 15, 9, 0)
    assert parse_date('2024-07-15T10:00:00+01:00') == datetime(2024, 7, 15, 9, 0)
    with pytest.raises(ValidationError):
        parse_date('15th July')


def test_profile_needs_database():
    db_instance.close()
    with pytest.raises(ServiceUnavailableError):
        User.find_by_email('ada@example.com')
