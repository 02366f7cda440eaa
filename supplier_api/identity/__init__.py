"""Identidad: usuarios, claims, JWT y lockout."""
