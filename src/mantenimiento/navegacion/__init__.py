# mantenimiento/navegacion/__init__.py
"""Menú de navegación construido a partir de los perfiles del usuario."""
