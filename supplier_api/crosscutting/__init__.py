"""Concerns transversales: config, logging, errores RFC7807, middlewares."""
