"""Contratos (Protocol) entre el dominio y los adaptadores.

Por qué:
- El walker de paginación solo necesita saber extraer items y continuación.
"""
