"""
===============================================================================
TARJETA CRC — domain/entities.py
===============================================================================

Módulo:
    Entidades del Dominio (Supplier)

Responsabilidades:
    - Definir la única entidad persistida del sistema: el proveedor.
    - Mantener tipos claros para casos de uso y repositorios.

Colaboradores:
    - domain.validation: reglas declarativas por campo.
    - domain.repositories: contrato de persistencia (unit of work).
    - interfaces/api: serializa Supplier <-> JSON (camelCase).

Principios:
    - Sin dependencias a DB/FastAPI.
    - `is_active` es un dato plano: no hay borrado lógico.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional
from uuid import UUID


@dataclass
class Supplier:
    """
    Proveedor (vendor).

    Invariante:
      - `id` identifica exactamente un registro y nunca se reasigna.
    """

    id: UUID
    name: Optional[str] = None
    document: Optional[str] = None
    is_active: bool = False

    def copy(self) -> "Supplier":
        """Copia desacoplada (snapshot) de la instancia."""
        return replace(self)

    def with_id(self, supplier_id: UUID) -> "Supplier":
        """Misma data, otra identidad (usado cuando la ruta manda sobre el body)."""
        return replace(self, id=supplier_id)
