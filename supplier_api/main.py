"""
Name: ASGI Entrypoint (supplier_api.main)

Responsibilities:
  - Re-export the FastAPI app for ASGI servers and tooling
  - Keep the import path stable: uvicorn supplier_api.main:app

Notes/Constraints:
  - No configuration or IO should live here
"""

from supplier_api.api.main import app

__all__ = ["app"]
