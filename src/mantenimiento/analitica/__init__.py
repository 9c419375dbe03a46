# mantenimiento/analitica/__init__.py
"""Series de corriente, desbalance y factor de carga, y estado de salud de cada componente."""
