"""Document identifiers."""
import re
import uuid

PERMANENT_PREFIX = "permanent"


def new_document_id() -> str:
    """Return a new random document id."""
    return str(uuid.uuid4())


def permanent_booking_id(table_id: str, day) -> str:
    return f"{PERMANENT_PREFIX}-{table_id}-{day.isoformat()}"


def is_permanent_booking_id(booking_id: str) -> bool:
    return booking_id.startswith(f"{PERMANENT_PREFIX}-")


def schedule_document_id(kind: str, day) -> str:
    return f"{kind}:{day.isoformat()}"


def game_system_id(name: str) -> str:
    """Slug a game system name, e.g. "Warhammer 40,000" -> "warhammer-40-000"."""
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")
