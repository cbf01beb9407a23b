"""Formatters de logging estruturado.

Todo log sai como uma linha JSON com os campos de REQUIRED_LOG_FIELDS.
Campos passados via `extra` (ex: interaction_id, command_path) são
anexados pelo JsonFormatter sem configuração adicional.
"""

from __future__ import annotations

from pythonjsonlogger.json import JsonFormatter

# Campos obrigatórios em todo log estruturado
REQUIRED_LOG_FIELDS = (
    "asctime",
    "levelname",
    "name",
    "message",
    "correlation_id",
    "service",
)

# Nomes curtos usados nos dashboards
FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}


def create_json_formatter() -> JsonFormatter:
    """Cria formatter JSON com campos padronizados.

    Exemplo de output:
        {
            "asctime": "2026-10-19 10:30:00,123",
            "level": "INFO",
            "logger": "app.interactions.dispatcher",
            "message": "interaction_dispatched",
            "correlation_id": "1180234829384",
            "service": "pyloto_slash",
            "command_path": "config/set"
        }
    """
    format_string = " ".join(f"%({field})s" for field in REQUIRED_LOG_FIELDS)

    return JsonFormatter(
        format_string,
        rename_fields=FIELD_RENAME_MAP,
    )
