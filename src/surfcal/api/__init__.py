"""FastAPI application and routes.

## API Structure

- /api/surf/hours - Surfable hours for one or more spots
- /api/spots - Spot search, details and popular spots
- /health - Liveness check

## Upstream Errors

Failures of the forecast or calendar source are reported as 502; a missing
forecast source (no credentials, failed login) as 503.
"""

from surfcal.api.app import create_app

__all__ = ["create_app"]
