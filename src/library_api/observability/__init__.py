"""
library_api.observability

Observability package.

Responsibilities:
- Structured logging configuration.
- Request context propagation so access decisions are traceable per request.
"""

# Package marker.
