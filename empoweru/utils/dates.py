# empoweru/utils/dates.py
from datetime import datetime
from typing import Optional

# "05 March, 2024" - the format the web client sends and displays
DISPLAY_DATE_FORMAT = "%d %B, %Y"


def parse_display_date(value) -> Optional[datetime]:
    """Parse a "DD Month, YYYY" string; unparseable values give None."""
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        return None
    try:
        return datetime.strptime(value.strip(), DISPLAY_DATE_FORMAT)
    except ValueError:
        return None
