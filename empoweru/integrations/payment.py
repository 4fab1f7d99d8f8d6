"""
empoweru/integrations/payment.py - Payment gateway (iyzico) integration.

Application fees are paid through iyzico's hosted checkout form. Initialising a checkout
form returns a token the web client uses to open the payment page; that token plays the
role of the client secret handed back to the browser.
"""
import http.client
import json
import logging
import uuid
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

import iyzipay

from empoweru.config import Settings

logger = logging.getLogger(__name__)


class PaymentError(Exception):
    """The payment processor refused or failed the request."""


def to_minor_units(price) -> int:
    """Price in major units (e.g. 12.345) to minor units, rounded half-up (1235)."""
    return int((Decimal(str(price)) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _options(settings: Settings) -> dict:
    return {
        "api_key": settings.iyzico_api_key,
        "secret_key": settings.iyzico_secret_key,
        "base_url": settings.iyzico_base_url,
    }


def _read_json(response) -> dict:
    if isinstance(response, dict):
        return response
    raw = response.read() if hasattr(response, "read") else response
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8")
    body = json.loads(raw)
    if not isinstance(body, dict):
        raise ValueError("Unexpected iyzico reply")
    return body


def create_payment_intent(settings: Settings, amount_minor: int, currency: Optional[str] = None,
                          buyer: Optional[dict] = None) -> str:
    """
    Initialise a checkout form for `amount_minor` and return its token.

    Without API keys no request is made and a simulated token is returned (development).
    """
    if not settings.iyzico_api_key or not settings.iyzico_secret_key:
        logger.warning("iyzico API keys not set - returning a simulated client secret.")
        return f"simulated_{uuid.uuid4().hex}"

    buyer = buyer or {}
    conversation_id = uuid.uuid4().hex
    price = f"{Decimal(amount_minor) / 100:.2f}"
    name = buyer.get("name") or "EmpowerU"
    address = {
        "contactName": name,
        "city": "N/A",
        "country": "N/A",
        "address": "N/A",
    }
    request = {
        "locale": "en",
        "conversationId": conversation_id,
        "price": price,
        "paidPrice": price,
        "currency": currency or settings.payment_currency,
        "basketId": conversation_id,
        "paymentGroup": "PRODUCT",
        "callbackUrl": settings.iyzico_callback_url,
        "enabledInstallments": ["1"],
        "buyer": {
            "id": buyer.get("uid") or conversation_id,
            "name": name,
            "surname": name.split(" ")[-1],
            "email": buyer.get("email") or "",
            "identityNumber": "11111111111",
            "registrationAddress": "N/A",
            "ip": "0.0.0.0",
            "city": "N/A",
            "country": "N/A",
        },
        "billingAddress": address,
        "basketItems": [{
            "id": "application-fee",
            "name": "Scholarship application fee",
            "category1": "Education",
            "itemType": "VIRTUAL",
            "price": price,
        }],
    }
    try:
        body = _read_json(iyzipay.CheckoutFormInitialize().create(request, _options(settings)))
    except (OSError, ValueError, http.client.HTTPException) as e:
        logger.exception("iyzico checkout form request failed")
        raise PaymentError(f"Payment service error: {e}") from e

    if body.get("status") != "success":
        message = body.get("errorMessage") or "Payment initialisation failed"
        logger.error("iyzico refused checkout form: %s", message)
        raise PaymentError(message)
    token = body.get("token")
    if not token:
        logger.error("iyzico checkout form reply without a token")
        raise PaymentError("Payment initialisation failed")
    return token
