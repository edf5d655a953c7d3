"""Tests for lexaid/utils/export.py and lexaid/utils/payments.py."""

from datetime import date
from unittest.mock import MagicMock, patch

import pytest
import requests

from lexaid.config.plans import get_plan
from lexaid.utils import export
from lexaid.utils.errors import PaymentError, ServiceUnavailableError, ValidationError
from lexaid.utils.payments import confirm_callback, is_success_status, verify_transaction


# ── Export ────────────────────────────────────────────────────────────────


def test_export_filename():
    assert export.export_filename('Bail Application', 'txt', date(2024, 5, 1)) == 'Bail_Application_2024-05-01.txt'
    assert export.export_filename('Enforcement  of Rights', 'docx', date(2024, 12, 9)) == \
        'Enforcement_of_Rights_2024-12-09.docx'


def test_text_export_is_exact_utf8():
    content = 'Naira sum: ₦2,000,000\nSigned.'
    assert export.to_text(content) == content.encode('utf-8')


def test_pseudo_docx_escapes_content():
    body = export.to_pseudo_docx('Plaintiff <Ada> & Co.', title='Affidavit').decode('utf-8')

    assert "xmlns:w='urn:schemas-microsoft-com:office:word'" in body
    assert 'Times New Roman' in body
    assert '<pre>Plaintiff &lt;Ada&gt; &amp; Co.</pre>' in body
    assert '<title>Affidavit</title>' in body


def test_print_page_opens_print_dialog():
    page = export.to_print_page('Text', title='Bail Application')

    assert 'window.print()' in page
    assert '<pre>Text</pre>' in page


@pytest.mark.parametrize('func', [export.to_text, export.to_pseudo_docx, export.to_print_page])
def test_export_rejects_empty_content(func):
    with pytest.raises(ValidationError):
        func('')


# ── Payments ──────────────────────────────────────────────────────────────

BASIC = get_plan('basic')


def gateway_reply(payload):
    response = MagicMock()
    response.json.return_value = payload
    return response


def paid(**overrides):
    data = {'status': 'successful', 'tx_ref': 'lexaid-basic-1718000000000', 'amount': 19, 'currency': 'USD'}
    data.update(overrides)
    return {'status': 'success', 'data': data}


def test_success_statuses():
    assert is_success_status('successful')
    assert is_success_status(' Completed ')
    assert not is_success_status('cancelled')
    assert not is_success_status(None)


def test_callback_trusted_without_secret_key():
    assert confirm_callback({'status': 'successful', 'transaction_id': 1234}, BASIC) == '1234'


def test_callback_rejects_failed_status():
    with pytest.raises(PaymentError):
        confirm_callback({'status': 'cancelled', 'transaction_id': 1234}, BASIC)


def test_callback_requires_transaction_id():
    with pytest.raises(PaymentError):
        confirm_callback({'status': 'successful'}, BASIC)


@pytest.mark.parametrize('plan_id', ['trial', 'enterprise'])
def test_callback_rejects_plans_not_sold_online(plan_id):
    with pytest.raises(PaymentError):
        confirm_callback({'status': 'successful', 'transaction_id': 1}, get_plan(plan_id))


def test_verify_transaction_success():
    with patch('lexaid.utils.payments.requests.get') as get:
        get.return_value = gateway_reply(paid())

        data = verify_transaction(99, 'FLWSECK_TEST')

    assert data['amount'] == 19
    assert get.call_args.kwargs['headers'] == {'Authorization': 'Bearer FLWSECK_TEST'}
    assert get.call_args.args[0].endswith('/transactions/99/verify')


def test_verified_callback_for_matching_plan():
    with patch('lexaid.utils.payments.requests.get', return_value=gateway_reply(paid())):
        assert confirm_callback({'status': 'successful', 'transaction_id': 99}, BASIC, 'FLWSECK_TEST') == '99'


def test_verify_transaction_failed_at_gateway():
    with patch('lexaid.utils.payments.requests.get') as get:
        get.return_value = gateway_reply(paid(status='failed'))

        with pytest.raises(PaymentError):
            confirm_callback({'status': 'successful', 'transaction_id': 99}, BASIC, secret_key='FLWSECK_TEST')


@pytest.mark.parametrize('overrides', [
    {'tx_ref': 'lexaid-pro-1718000000000'},
    {'tx_ref': None},
    {'amount': 1},
    {'amount': None},
    {'currency': 'NGN'},
])
def test_verified_transaction_must_pay_for_the_plan(overrides):
    with patch('lexaid.utils.payments.requests.get', return_value=gateway_reply(paid(**overrides))):
        with pytest.raises(PaymentError):
            confirm_callback({'status': 'successful', 'transaction_id': 99}, BASIC, 'FLWSECK_TEST')


def test_cheap_payment_cannot_buy_a_dearer_plan():
    with patch('lexaid.utils.payments.requests.get', return_value=gateway_reply(paid())):
        with pytest.raises(PaymentError):
            confirm_callback({'status': 'successful', 'transaction_id': 99}, get_plan('pro'), 'FLWSECK_TEST')


def test_verify_transaction_gateway_unreachable():
    with patch('lexaid.utils.payments.requests.get', side_effect=requests.ConnectionError('down')):
        with pytest.raises(ServiceUnavailableError):
            verify_transaction(99, 'FLWSECK_TEST')
