# empoweru/services/payment_service.py
from typing import Any, Dict, Optional

from empoweru.config import Settings
from empoweru.integrations.payment import create_payment_intent, to_minor_units
from empoweru.repositories.collections import PAYMENTS, SCHOLARSHIPS, USERS
from empoweru.repositories.documents import get_document, insert_document, with_reference


def create_intent(db, settings: Settings, uid: str, price) -> str:
    """Client secret for charging `price` to the caller."""
    buyer: Optional[dict] = get_document(db, USERS, uid) or {"uid": uid}
    return create_payment_intent(settings, to_minor_units(price), buyer=buyer)


def store(db, payment: Dict[str, Any]) -> Dict[str, Any]:
    # Payments are append-only
    return insert_document(db, PAYMENTS, with_reference(db, payment, "scholarshipId", SCHOLARSHIPS))
