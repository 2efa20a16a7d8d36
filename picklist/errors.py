"""Exceptions raised by the picklist request layer and queue lifecycle.

Store operations never raise for expected business conditions; they return
``False``.  These exceptions exist for the facade, which turns a rejected
request into something a transport can map to a status code.
"""


class PickListError(Exception):
    """Base class for every error surfaced to a caller."""

    status_code: int = 500

    def __init__(self, message: str | None = None):
        self.message = message or self.__class__.__doc__ or "Request failed"
        super().__init__(self.message)


class InvalidRequestError(PickListError):
    """Request payload or query parameters are malformed."""

    status_code = 400


class ElementNotFoundError(PickListError):
    """Element not found."""

    status_code = 404

    def __init__(self, element_id: int, message: str | None = None):
        self.element_id = element_id
        super().__init__(message or f"Element not found: {element_id}")


class AlreadySelectedError(PickListError):
    """Element already selected."""

    status_code = 400

    def __init__(self, element_id: int, message: str | None = None):
        self.element_id = element_id
        super().__init__(message or f"Element already selected: {element_id}")


class NotSelectedError(PickListError):
    """Element not selected."""

    status_code = 400

    def __init__(self, element_id: int, message: str | None = None):
        self.element_id = element_id
        super().__init__(message or f"Element not selected: {element_id}")


class ElementExistsError(PickListError):
    """Element already exists."""

    status_code = 400

    def __init__(self, element_id: int, message: str | None = None):
        self.element_id = element_id
        super().__init__(message or f"Element already exists: {element_id}")


class QueueStoppedError(PickListError):
    """The batching queue has been stopped and accepts no more work."""

    status_code = 503
