"""
Routers HTTP por contexto:
  - auth.py: /register, /login
  - suppliers.py: /supplier CRUD
"""

from .auth import router as auth_router
from .suppliers import router as suppliers_router

__all__ = ["auth_router", "suppliers_router"]
