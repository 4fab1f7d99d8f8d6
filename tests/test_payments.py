"""Payment intents through iyzico and payment records."""
import http.client
import json

import iyzipay
import pytest

from conftest import auth_header
from empoweru.config import Settings, get_settings
from empoweru.integrations.payment import PaymentError, create_payment_intent, to_minor_units
from empoweru.main import app
from fakes import FakeDocumentReference


class _FakeCheckoutForm:
    requests = []
    response = {"status": "success", "token": "cf-token-123"}

    def create(self, request, options):
        self.requests.append((request, options))
        if isinstance(self.response, Exception):
            raise self.response
        return json.dumps(self.response).encode("utf-8")


@pytest.fixture
def checkout(monkeypatch):
    _FakeCheckoutForm.requests = []
    _FakeCheckoutForm.response = {"status": "success", "token": "cf-token-123"}
    monkeypatch.setattr(iyzipay, "CheckoutFormInitialize", _FakeCheckoutForm)
    return _FakeCheckoutForm


@pytest.fixture
def live_settings():
    return Settings(iyzico_api_key="key", iyzico_secret_key="secret", payment_currency="USD")


@pytest.mark.parametrize("price, minor", [(12.5, 1250), (12.345, 1235), (0.01, 1), ("19.99", 1999), (100, 10000)])
def test_to_minor_units(price, minor):
    assert to_minor_units(price) == minor


def test_simulated_secret_without_keys(checkout):
    secret = create_payment_intent(Settings(iyzico_api_key="", iyzico_secret_key=""), 1250)
    assert secret.startswith("simulated_")
    assert checkout.requests == []


def test_checkout_form_request(checkout, live_settings):
    secret = create_payment_intent(live_settings, 1250, buyer={"uid": "stu-1", "name": "Sam Lee",
                                                               "email": "sam@example.com"})
    assert secret == "cf-token-123"
    request, options = checkout.requests[0]
    assert request["price"] == request["paidPrice"] == "12.50"
    assert request["currency"] == "USD"
    assert request["buyer"]["id"] == "stu-1"
    assert request["buyer"]["surname"] == "Lee"
    assert options == {"api_key": "key", "secret_key": "secret", "base_url": "sandbox-api.iyzipay.com"}


def test_refusal_raises(checkout, live_settings):
    checkout.response = {"status": "failure", "errorMessage": "Invalid price"}
    with pytest.raises(PaymentError, match="Invalid price"):
        create_payment_intent(live_settings, 1250)


class TestEndpoints:
    @pytest.fixture(autouse=True)
    def _settings(self, client, live_settings):
        app.dependency_overrides[get_settings] = lambda: live_settings

    def test_intent(self, client, checkout, student):
        resp = client.post("/create-payment-intent", json={"price": 12.345}, headers=auth_header(student))
        assert resp.json() == {"clientSecret": "cf-token-123"}
        assert checkout.requests[0][0]["price"] == "12.35"

    def test_intent_gateway_failure_is_502(self, client, checkout, student):
        checkout.response = {"status": "failure", "errorMessage": "Card network down"}
        resp = client.post("/create-payment-intent", json={"price": 10}, headers=auth_header(student))
        assert resp.status_code == 502
        assert resp.json() == {"message": "Card network down"}

    @pytest.mark.parametrize("price", [0, -5, "abc"])
    def test_intent_rejects_bad_price(self, client, checkout, student, price):
        resp = client.post("/create-payment-intent", json={"price": price}, headers=auth_header(student))
        assert resp.status_code == 422
        assert checkout.requests == []

    def test_intent_requires_authentication(self, client, checkout):
        assert client.post("/create-payment-intent", json={"price": 10}).status_code == 401

    def test_store_payment(self, client, db, student):
        resp = client.post(
            "/payments",
            json={"scholarshipId": "sch-1", "amount": 60, "transactionId": "cf-token-123", "userUID": student},
            headers=auth_header(student),
        )
        stored = db.raw("payments", resp.json()["insertedId"])
        assert isinstance(stored["scholarshipId"], FakeDocumentReference)
        assert stored["scholarshipId"].id == "sch-1"
        assert stored["userUID"] == student


@pytest.mark.parametrize("response", [
    http.client.IncompleteRead(b"{\"status\""),
    http.client.BadStatusLine("garbage"),
    ConnectionResetError("reset by peer"),
    {"status": "success"},
    ["not", "an", "object"],
])
def test_broken_gateway_replies_raise_payment_error(checkout, live_settings, response):
    checkout.response = response
    with pytest.raises(PaymentError):
        create_payment_intent(live_settings, 1250)


def test_broken_gateway_reply_is_502(client, checkout, live_settings, student):
    app.dependency_overrides[get_settings] = lambda: live_settings
    checkout.response = http.client.IncompleteRead(b"")
    resp = client.post("/create-payment-intent", json={"price": 10}, headers=auth_header(student))
    assert resp.status_code == 502
