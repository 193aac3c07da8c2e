# app/helpers/ids.py
import uuid


def new_id() -> str:
    """Opaque primary key."""
    return str(uuid.uuid4())
