"""
library_api.auth

Authentication/authorization package.

Responsibilities:
- Role hierarchy and the `Principal` identity type.
- Access policy table (operation -> required role).
- Authenticator, Authorizer and the enforcing Gate.
- FastAPI dependencies wiring the Gate into routers.
"""

# Package marker.
