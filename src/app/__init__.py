"""App — orquestração do serviço de interações.

Subpastas:
- bootstrap/: composition root (logging, settings, wiring)
- commands/: registro de handlers, validação e catálogo remoto
- interactions/: dispatcher, contexto do handler e resposta única
- observability/: correlation id para logs estruturados

Padrão: app executa; api adapta; fsm governa; utils apoia.
"""
