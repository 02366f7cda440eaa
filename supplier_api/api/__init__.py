"""Composición de la app FastAPI (lifespan, middlewares, handlers)."""
