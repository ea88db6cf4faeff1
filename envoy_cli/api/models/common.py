"""Field types shared by the request and response models."""

from datetime import datetime
from typing import Annotated

from pydantic import BeforeValidator


def _as_opaque_id(value):
    # Older servers send numeric ids; keep their string form.
    if value is None or isinstance(value, str):
        return value
    return str(value)


def _blank_to_none(value):
    if value == "":
        return None
    return value


OpaqueID = Annotated[str, BeforeValidator(_as_opaque_id)]

# RFC3339 on the wire; an absent or empty timestamp is None and serializes to null.
Timestamp = Annotated[datetime | None, BeforeValidator(_blank_to_none)]
