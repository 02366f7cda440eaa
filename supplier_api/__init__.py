"""Supplier API: CRUD de proveedores + registro/login JWT."""

__version__ = "1.0.0"
