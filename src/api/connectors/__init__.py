"""Connectors — adapters de borda para APIs externas.

Estrutura:
- discord/: assinatura Ed25519, modelos de interação e cliente REST
"""

__all__: list[str] = []
