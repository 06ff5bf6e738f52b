import re
from datetime import date

_ISO_DATE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def parse_date_iso(raw: object) -> date | None:
    """Parse a strict 'YYYY-MM-DD' string. E.g. '2025-02-30' -> None.

    Anything that is not exactly that shape, or is not a real calendar
    day, gives None.
    """
    if isinstance(raw, date):
        return raw
    s = str(raw or "")
    if not _ISO_DATE.fullmatch(s):
        return None
    try:
        return date.fromisoformat(s)
    except ValueError:
        return None
