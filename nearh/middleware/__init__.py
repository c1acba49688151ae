"""HTTP middleware: timeout, request ID, request gate.

Applied in main; order matters (last added = outermost).
"""

from nearh.middleware.request_gate import RequestGateMiddleware, decide_route
from nearh.middleware.request_id import RequestIDMiddleware
from nearh.middleware.timeout import TimeoutMiddleware

__all__ = [
    "RequestGateMiddleware",
    "RequestIDMiddleware",
    "TimeoutMiddleware",
    "decide_route",
]
