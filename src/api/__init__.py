"""API — camada de borda do serviço.

Responsabilidades:
- Receber o webhook de interações do Discord
- Validar assinaturas e payloads
- Construir corpos de mensagem para a REST API
- Falar com a REST API do Discord (cliente com retry de 429)

Subpastas:
- connectors/: assinatura, modelos wire e cliente REST
- payload_builders/: construção/validação de corpos de mensagem
- routes/: endpoints HTTP (webhook, health)

NÃO PODE conter: FSM, roteamento de comandos, orquestração.
"""
