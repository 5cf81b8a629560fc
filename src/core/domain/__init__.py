"""Modelos y entidades del dominio.

- Estructuras de datos puras (Pydantic v2): veredictos y estado de progreso.
- El dominio no conoce HTTP, CLI ni ficheros.
"""
