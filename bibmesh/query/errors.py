# bibmesh/query/errors.py


class MalformedQuery(ValueError):
    """Raised when query text does not follow the query mini-language."""

    def __init__(self, message: str, fragment: str = "") -> None:
        self.fragment = fragment
        if fragment:
            message = f"{message}: {fragment!r}"
        super().__init__(message)
