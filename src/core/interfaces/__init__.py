"""Contratos del Core (Protocol).

Por qué:
- El flujo depende de `CompletionService`, no del SDK concreto.
- Los tests sustituyen el proveedor por un doble sin tocar el flujo.
"""
