"""Domain exceptions shared by repositories and routers.

Repositories raise these; ``api.main`` maps them onto HTTP responses so
handlers never build error responses for missing rows themselves.
"""


class NotFoundError(Exception):
    """Raised when a row with the requested id does not exist."""

    resource = "item"

    def __init__(self, item_id: object):
        self.item_id = item_id
        super().__init__(f"{self.resource} {item_id!r} not found")
