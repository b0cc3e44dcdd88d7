"""Modelos, errores y entidades del dominio.

Por qué:
- Aquí viven las estructuras de datos puras y estrictas (Pydantic v2) y la
  jerarquía de errores del pipeline.
- El dominio no conoce HTTP, CLI, ni drivers de base de datos.
"""
