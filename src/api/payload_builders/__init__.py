"""Payload builders — construção de payloads para APIs externas.

Estrutura:
- discord/: corpos de mensagem (resposta, follow-up, edição)
"""

__all__: list[str] = []
