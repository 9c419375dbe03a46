# mantenimiento/web/__init__.py
"""Interfaz web: API FastAPI y aplicación ReactPy."""
