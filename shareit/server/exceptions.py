"""
Failures raised by the booking core.

Each one maps onto a single HTTP status in ``main.py``; anything else that
escapes a route is treated as an internal error.
"""


class ShareItError(Exception):
    """Base class for every business-rule failure."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(ShareItError):
    """A referenced user, item or booking does not exist."""

    def __init__(self, entity: str, entity_id: int):
        super().__init__(f"{entity} with id {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class InvalidState(ShareItError):
    """A business rule rejects the requested operation."""


class Unauthorized(ShareItError):
    """The caller is not allowed to perform the operation."""
