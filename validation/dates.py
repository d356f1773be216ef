"""Day/month/year dates as the backend and the forms exchange them ("D/M/YYYY")."""

import re
from datetime import date
from typing import Optional

from contracts.worker_contracts import format_dmy
from errors import DraftRejected


_DMY_RE = re.compile(r"^\s*(\d{1,2})/(\d{1,2})/(\d{4})\s*$")


def parse_dmy(value: str, field: str = "fecha") -> date:
    """Parse a ``D/M/YYYY`` string into a calendar date.

    Args:
        value: Text such as "5/3/2025" or "05/03/2025"
        field: Draft field reported when the text is malformed

    Raises:
        DraftRejected: If the text is not a valid calendar date.
    """
    match = _DMY_RE.match(value or "")
    if not match:
        raise DraftRejected(field, f"La fecha '{value}' debe tener el formato D/M/AAAA")
    day, month, year = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError:
        raise DraftRejected(field, f"La fecha '{value}' no es una fecha válida")


def today_dmy(today: Optional[date] = None) -> str:
    """Today (or ``today``) as "D/M/YYYY"."""
    return format_dmy(today or date.today())
