"""
===============================================================================
TARJETA CRC — domain/validation.py
===============================================================================

Módulo:
    Validation Gate (tabla explícita de reglas por campo)

Responsabilidades:
    - Declarar, por campo, una lista ordenada de (predicado, mensaje).
    - Evaluar una entidad contra esa tabla sin efectos colaterales.
    - Devolver un mapa campo -> mensajes (vacío si es válida).

Colaboradores:
    - domain.entities.Supplier
    - application/usecases/suppliers (create / update)

Notas:
    - Corre antes de cada create y update; nunca antes de read/delete.
    - En update se valida el payload entrante como objeto independiente
      (no se mezcla con el registro existente).
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Sequence

from .entities import Supplier

Predicate = Callable[[Any], bool]


@dataclass(frozen=True, slots=True)
class FieldRule:
    """Una regla: predicado sobre el valor del campo + mensaje si falla."""

    predicate: Predicate
    message: str


def is_present(value: Any) -> bool:
    return value is not None


def is_not_blank(value: Any) -> bool:
    # None lo reporta is_present; acá solo strings vacíos / espacios.
    return value is None or (isinstance(value, str) and value.strip() != "")


def required(label: str) -> list[FieldRule]:
    """Presencia + no vacío, con mensajes estilo 'The X field is required.'"""
    return [
        FieldRule(is_present, f"The {label} field is required."),
        FieldRule(is_not_blank, f"The {label} field must not be empty."),
    ]


# Clave = nombre del campo tal como viaja en JSON.
SUPPLIER_RULES: Mapping[str, Sequence[FieldRule]] = {
    "name": required("Name"),
    "document": required("Document"),
}


@dataclass(frozen=True)
class ValidationResult:
    """Resultado del gate. `errors` vacío => válido."""

    errors: dict[str, list[str]]

    @property
    def is_valid(self) -> bool:
        return not self.errors


def validate(
    entity: object,
    rules: Mapping[str, Sequence[FieldRule]],
    attrs: Mapping[str, str] | None = None,
) -> ValidationResult:
    """
    Aplica `rules` sobre `entity`.

    `attrs` traduce nombre de campo (clave del error) -> atributo Python.
    Los mensajes de cada campo conservan el orden declarado.
    """
    errors: dict[str, list[str]] = {}
    for field_name, field_rules in rules.items():
        attr = (attrs or {}).get(field_name, field_name)
        value = getattr(entity, attr, None)
        messages = [rule.message for rule in field_rules if not rule.predicate(value)]
        if messages:
            errors[field_name] = messages
    return ValidationResult(errors=errors)


def validate_supplier(supplier: Supplier) -> ValidationResult:
    """Gate de validación para proveedores (create y update)."""
    return validate(supplier, SUPPLIER_RULES)
