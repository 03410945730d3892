"""Dominio de wire: codecs puros y modelos.

Por qué:
- Enums abiertos/cerrados, uniones discriminadas y modelos base no hacen I/O.
- Los adaptadores (HTTP, CLI) dependen de este paquete, nunca al revés.
"""
