"""
library_api.services

Service layer (transaction owners).
"""

# Package marker.
