"""HTTP surface - FastAPI application, routes, and the AuthGate dependency."""
