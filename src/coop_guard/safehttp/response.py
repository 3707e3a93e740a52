"""Request-scoped response under construction.

The ResponseWriter collects headers (via Header) and, if an interceptor
short-circuits the pipeline, the response body and status.
"""

from __future__ import annotations

__all__ = ["ResponseWriter"]

from coop_guard.exceptions import ResponseAlreadyWrittenError
from coop_guard.safehttp.header import Header
from coop_guard.safehttp.result import Result, written


class ResponseWriter:
    """Mutable response for a single request.

    Attributes:
        header: Header map; COOP and other owned headers are claimed here.
        status_code: Status recorded by write(), None until written.
        body: Body recorded by write(), empty until written.
    """

    def __init__(self, header: Header | None = None) -> None:
        self.header = header if header is not None else Header()
        self.status_code: int | None = None
        self.body: bytes = b""

    @property
    def written(self) -> bool:
        """True once write() has been called."""
        return self.status_code is not None

    def write(self, body: bytes | str = b"", status_code: int = 200) -> Result:
        """Record a complete response.

        Args:
            body: Response body; str is encoded as UTF-8.
            status_code: HTTP status code.

        Returns:
            written() so interceptors can return it directly.

        Raises:
            ResponseAlreadyWrittenError: If the response was already written.
        """
        if self.written:
            raise ResponseAlreadyWrittenError(f"Response already written with status {self.status_code}")
        self.body = body.encode("utf-8") if isinstance(body, str) else body
        self.status_code = status_code
        return written()
