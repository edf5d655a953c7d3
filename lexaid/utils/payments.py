"""Flutterwave checkout callback handling."""
import logging

import requests

from lexaid.utils.errors import PaymentError, ServiceUnavailableError

logger = logging.getLogger(__name__)

FLUTTERWAVE_VERIFY_URL = 'https://api.flutterwave.com/v3/transactions/{transaction_id}/verify'
SUCCESS_STATUSES = ('successful', 'completed')


def is_success_status(status):
    return (status or '').strip().lower() in SUCCESS_STATUSES


def verify_transaction(transaction_id, secret_key, timeout=15):
    """Confirm a transaction with Flutterwave.

    Returns the transaction data when the gateway reports it successful,
    raises PaymentError otherwise.
    """
    try:
        response = requests.get(
            FLUTTERWAVE_VERIFY_URL.format(transaction_id=transaction_id),
            headers={'Authorization': f'Bearer {secret_key}'},
            timeout=timeout
        )
        payload = response.json()
    except (requests.RequestException, ValueError) as e:
        logger.error("Payment verification request failed for %s: %s", transaction_id, e)
        raise ServiceUnavailableError("Could not reach the payment gateway to verify the payment.")

    data = payload.get('data') or {}
    if payload.get('status') != 'success' or not is_success_status(data.get('status')):
        logger.warning("Payment %s did not verify: %s", transaction_id, payload.get('message'))
        raise PaymentError("Payment could not be verified.")

    return data


def check_transaction_matches_plan(data, plan):
    """Reject a verified transaction that did not pay for this plan"""
    tx_ref = str(data.get('tx_ref') or '')
    currency = str(data.get('currency') or '').upper()
    try:
        amount = float(data.get('amount'))
    except (TypeError, ValueError):
        amount = None

    if not tx_ref.startswith(plan.tx_ref_prefix()):
        raise PaymentError("Payment reference does not match the selected plan.")
    if currency != plan.currency or amount is None or amount < plan.amount:
        raise PaymentError("Payment amount does not match the selected plan.")


def confirm_callback(callback, plan, secret_key=None):
    """Decide whether a checkout callback may activate a subscription.

    A callback reporting anything but success is rejected without touching
    stored state. With a secret key configured the transaction is checked
    server-side, including that its reference, amount and currency belong
    to ``plan``; without one the client-reported status is accepted.
    """
    status = callback.get('status')
    transaction_id = callback.get('transaction_id')

    if not plan.purchasable:
        raise PaymentError(f"{plan.name} cannot be bought online.")
    if not is_success_status(status):
        raise PaymentError(f"Payment was not successful (status: {status or 'unknown'}).")
    if not transaction_id:
        raise PaymentError("Payment callback is missing a transaction id.")

    if secret_key:
        data = verify_transaction(transaction_id, secret_key)
        check_transaction_matches_plan(data, plan)
    else:
        logger.warning("FLUTTERWAVE_SECRET_KEY not set; trusting client-reported payment %s", transaction_id)

    return str(transaction_id)
