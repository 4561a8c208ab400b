"""Row identifiers and write timestamps."""
import uuid
from datetime import datetime, timezone

from trip_planner.core.validation import format_instant


def make_id(prefix: str) -> str:
    """Prefixed random identifier, e.g. ``trip_1b4e28ba-2fa1-11d2-883f-0016d3cca427``."""
    return f"{prefix}_{uuid.uuid4()}"


def now_iso() -> str:
    return format_instant(datetime.now(timezone.utc))
