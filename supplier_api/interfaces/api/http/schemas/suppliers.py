"""
===============================================================================
TARJETA CRC — schemas/suppliers.py
===============================================================================

Módulo:
    Schemas HTTP para Suppliers

Responsabilidades:
    - DTOs de request/response con la forma JSON pública:
        { "id": uuid, "name": str|null, "document": str|null, "isActive": bool }
    - Mapear DTO <-> entidad de dominio.

Reglas:
    - El schema NO valida presencia de name/document: eso es del gate de
      dominio (para devolver el mapa campo -> mensajes uniforme).
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from supplier_api.domain.entities import Supplier


class SupplierIn(BaseModel):
    """Body de POST / PUT."""

    model_config = ConfigDict(populate_by_name=True)

    id: UUID | None = Field(default=None, description="Omitido => se genera")
    name: str | None = None
    document: str | None = None
    is_active: bool = Field(default=False, alias="isActive")

    def to_entity(self) -> Supplier:
        # R: id None se resuelve en el caso de uso (create genera, update usa la ruta).
        return Supplier(
            id=self.id,  # type: ignore[arg-type]
            name=self.name,
            document=self.document,
            is_active=self.is_active,
        )


class SupplierOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: UUID
    name: str | None = None
    document: str | None = None
    is_active: bool = Field(default=False, alias="isActive")

    @classmethod
    def from_entity(cls, supplier: Supplier) -> "SupplierOut":
        return cls(
            id=supplier.id,
            name=supplier.name,
            document=supplier.document,
            is_active=supplier.is_active,
        )
