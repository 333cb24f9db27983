"""Task identifier generation."""

import uuid


def new_id() -> str:
    """Generate a fresh opaque task id."""
    return str(uuid.uuid4())
