"""Exception hierarchy.

Only infrastructure failures surface as exceptions.  A missing attribute is
never an error: getters return ``None`` or an empty list instead.
"""

from __future__ import annotations


class PageAttrsError(Exception):
    """Base class for all pageattrs errors."""


class DocumentError(PageAttrsError):
    """The parsed document could not be built, queried or serialized."""


class SelectorError(DocumentError):
    """A CSS or XPath selector is malformed.

    Attributes:
        selector -- the offending selector string
    """

    def __init__(self, message: str, selector: str = "") -> None:
        super().__init__(message)
        self.selector = selector


class FetchError(PageAttrsError):
    """Raised when an outbound lookup cannot be completed.

    Attributes:
        url    -- the URL that failed
        status -- HTTP status code (0 if no response was received)
    """

    def __init__(self, message: str, url: str = "", status: int = 0) -> None:
        super().__init__(message)
        self.url = url
        self.status = status
