# mantenimiento/common/__init__.py
"""Utilidades compartidas: configuración, logging, excepciones y cliente HTTP base."""
