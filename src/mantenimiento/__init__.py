# mantenimiento/__init__.py
"""Tablero de mantenimiento predictivo."""
