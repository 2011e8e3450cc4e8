"""Modelos y validación del dominio.

Por qué:
- Aquí viven los esquemas de entrada/salida de la evaluación (Pydantic v2).
- El dominio no conoce HTTP, CLI, ni SDKs: solo conceptos del problema.
"""
