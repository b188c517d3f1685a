"""Primary key helpers shared by the ORM models."""

import uuid

# UUIDs are stored as their canonical 36 character text form.
UUID_LENGTH = 36


def new_id() -> str:
    """Return a fresh random identifier."""
    return str(uuid.uuid4())
