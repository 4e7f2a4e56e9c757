"""FastAPI application package for the Prakriti survey service.

This package exposes a small FastAPI application factory. It wires only
cross-cutting middleware (request-id and CORS) and mounts the API routers.
Business logic lives in `prakriti/logic/`, route handlers in
`prakriti/routes/` and the respondent-side flow in `prakriti/client/`.
"""

from __future__ import annotations

from prakriti.main import create_app

__all__ = ["create_app"]
