"""HTTP middleware: request ID and correlation ID.

Applied in main app; order matters (first added = innermost).
"""

from smartcampus.middleware.request_context import (
    CorrelationIDMiddleware,
    RequestContextLogFilter,
    RequestIDMiddleware,
)

__all__ = [
    "CorrelationIDMiddleware",
    "RequestContextLogFilter",
    "RequestIDMiddleware",
]
