# empoweru/schemas/common.py
from empoweru.repositories.documents import is_valid_id


def check_document_id(value):
    """Field validator body for reference fields sent as plain ids."""
    if not is_valid_id(value):
        raise ValueError("must be a valid document id")
    return value
