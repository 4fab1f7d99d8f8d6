"""Firestore collection names.

Firestore has no DDL; collections are created on first write. These constants are the
single source of truth for the collection names used across the services.
"""

USERS = "users"
SCHOLARSHIPS = "scholarships"
REVIEWS = "reviews"
APPLIED_SCHOLARSHIPS = "appliedScholarships"
PAYMENTS = "payments"
