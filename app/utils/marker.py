import random
import re
import string
from typing import Optional

from app.models.exceptions import InvalidMarkerIdError

MARKER_ID_LENGTH = 8
MARKER_ID_ALPHABET = string.ascii_uppercase + string.digits
STRICT_MARKER_ID = re.compile(r"^[A-Za-z0-9_-]{1,64}$")

_rng = random.SystemRandom()


def generate_marker_id(length: int = MARKER_ID_LENGTH) -> str:
    return "".join(_rng.choice(MARKER_ID_ALPHABET) for _ in range(length))


def resolve_marker_id(supplied: Optional[str], strict: bool = False) -> str:
    """
    Pick the marker ID for a request.

    Args:
        supplied (Optional[str]): Client-chosen ID, used verbatim when non-blank.
        strict (bool): Reject supplied IDs outside ``[A-Za-z0-9_-]{1,64}``.

    Returns:
        str: The supplied ID, or a freshly generated one.
    """
    if supplied is None or not supplied.strip():
        return generate_marker_id()
    if strict and not STRICT_MARKER_ID.match(supplied):
        raise InvalidMarkerIdError(f"marker ID {supplied!r} is not allowed")
    return supplied
