"""safehttp - Minimal interceptor pipeline.

The pieces an interceptor needs from its host pipeline: a response header map
with exclusive claiming, the response writer, the request descriptor, the
written/not-written result, the interceptor protocols and the dispatcher that
binds per-handler configs to interceptors.

Structure:
    header.py      - Header (claim, set, add, delete)
    response.py    - ResponseWriter
    request.py     - IncomingRequest
    result.py      - Result, written(), not_written()
    interceptor.py - Interceptor and InterceptorConfig protocols
    dispatch.py    - Dispatcher, BoundPipeline, select_config
"""

from coop_guard.safehttp.dispatch import BoundPipeline, Dispatcher, select_config
from coop_guard.safehttp.header import Header, HeaderSetter
from coop_guard.safehttp.interceptor import Interceptor, InterceptorConfig
from coop_guard.safehttp.request import IncomingRequest
from coop_guard.safehttp.response import ResponseWriter
from coop_guard.safehttp.result import Result, not_written, written

__all__ = [
    # Headers
    "Header",
    "HeaderSetter",
    # Request/response
    "IncomingRequest",
    "ResponseWriter",
    "Result",
    "not_written",
    "written",
    # Protocols
    "Interceptor",
    "InterceptorConfig",
    # Dispatch
    "BoundPipeline",
    "Dispatcher",
    "select_config",
]
