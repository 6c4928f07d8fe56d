import secrets
import string
from datetime import datetime, timezone
from typing import Callable

ID_ALPHABET = string.ascii_lowercase + string.digits


def id_generator(prefix: str, length: int) -> Callable[[], str]:
    """Build a factory of prefixed random ids, e.g. ``note_k2x9a0pq1z``."""

    def generate() -> str:
        suffix = "".join(secrets.choice(ID_ALPHABET) for _ in range(length))
        return f"{prefix}_{suffix}"

    return generate


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
