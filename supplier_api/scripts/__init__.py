"""Scripts operativos (python -m supplier_api.scripts.<name>)."""
