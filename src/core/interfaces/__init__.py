"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) para el store de settings, el cliente remoto y
  la función expuesta al host.
- El Core depende de estas abstracciones, nunca de tipos del host.
"""
