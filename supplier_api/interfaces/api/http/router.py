"""
===============================================================================
TARJETA CRC — router.py (Router raíz / Composición)
===============================================================================

Responsabilidades:
  - Definir el APIRouter raíz que se incluye en FastAPI (app.include_router).
  - Centralizar responses RFC7807 para OpenAPI.
  - Componer routers por contexto (auth / suppliers).

Patrones aplicados:
  - Composition over inheritance: router raíz compone sub-routers.
  - Factory: build_router() para testear composición sin side-effects al importar.

Colaboradores:
  - crosscutting.error_responses.OPENAPI_ERROR_RESPONSES
  - routers.* (sub-routers por feature)

Notas:
  - Se incluye desde supplier_api/api/main.py sin prefix (rutas en la raíz).
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter

from supplier_api.crosscutting.error_responses import OPENAPI_ERROR_RESPONSES

from .routers import auth_router, suppliers_router


def build_router() -> APIRouter:
    api_router = APIRouter(responses=OPENAPI_ERROR_RESPONSES)
    api_router.include_router(auth_router)
    api_router.include_router(suppliers_router)
    return api_router


router = build_router()

__all__ = ["router", "build_router"]
