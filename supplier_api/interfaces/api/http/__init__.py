"""Interfaces HTTP (FastAPI)."""
