"""Carregador de configuração YAML com resolução de variáveis de ambiente."""

import codecs
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import yaml

EXPORT_FORMATS = ["csv", "ris"]
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@dataclass
class MetricsConfig:
    encoding: str = "utf-8"
    delimiter: str = ","


@dataclass
class OutputConfig:
    directory: str = "output"
    formats: List[str] = field(default_factory=list)
    timestamp: bool = True


@dataclass
class LoggingConfig:
    file: str = ""
    level: str = "INFO"


@dataclass
class Config:
    metrics: MetricsConfig = field(default_factory=MetricsConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


ENV_VAR_PATTERN = re.compile(r"\$\{(\w+)\}")


def _resolve_env_vars(value: str) -> str:
    """Substitui referências ${VAR_NAME} pelo valor da variável de ambiente."""
    def replacer(match):
        var_name = match.group(1)
        return os.environ.get(var_name, "")
    return ENV_VAR_PATTERN.sub(replacer, value)


def _resolve_dict(d: dict) -> dict:
    """Resolve variáveis de ambiente recursivamente em um dicionário."""
    resolved = {}
    for k, v in d.items():
        if isinstance(v, str):
            resolved[k] = _resolve_env_vars(v)
        elif isinstance(v, dict):
            resolved[k] = _resolve_dict(v)
        elif isinstance(v, list):
            resolved[k] = [
                _resolve_env_vars(item) if isinstance(item, str) else item
                for item in v
            ]
        else:
            resolved[k] = v
    return resolved


def load_config(config_path: Optional[str] = None) -> Config:
    """Carrega e valida a configuração; sem caminho, retorna os valores padrão."""
    if config_path is None:
        return Config()

    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Arquivo de configuração não encontrado: {config_path}")

    with open(path, "r", encoding="utf-8") as f:
        try:
            raw = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"YAML inválido em {config_path}: {e}") from e

    if not isinstance(raw, dict):
        raise ValueError(f"Configuração inválida em {config_path}: esperado um mapeamento YAML")

    raw = _resolve_dict(raw)

    config = Config()

    # Métricas
    metrics_raw = raw.get("metrics", {}) or {}
    config.metrics = MetricsConfig(
        encoding=str(metrics_raw.get("encoding", "utf-8")),
        delimiter=str(metrics_raw.get("delimiter", ",")),
    )

    # Saída
    out_raw = raw.get("output", {}) or {}
    config.output = OutputConfig(
        directory=out_raw.get("directory", "output"),
        formats=[fmt.lower() for fmt in (out_raw.get("formats") or [])],
        timestamp=out_raw.get("timestamp", True),
    )

    # Logging
    log_raw = raw.get("logging", {}) or {}
    config.logging = LoggingConfig(
        file=log_raw.get("file", "") or "",
        level=str(log_raw.get("level", "INFO")).upper(),
    )

    # Validações
    try:
        codecs.lookup(config.metrics.encoding)
    except LookupError:
        raise ValueError(f"metrics.encoding desconhecido: {config.metrics.encoding}") from None
    if len(config.metrics.delimiter) != 1:
        raise ValueError(
            "metrics.delimiter deve ser um único caractere "
            f"(recebido: {config.metrics.delimiter!r})"
        )
    if config.logging.level not in LOG_LEVELS:
        raise ValueError(
            f"logging.level inválido: {config.logging.level}. Opções: {LOG_LEVELS}"
        )
    unknown = [fmt for fmt in config.output.formats if fmt not in EXPORT_FORMATS]
    if unknown:
        raise ValueError(
            f"Formatos de saída desconhecidos: {unknown}. Opções: {EXPORT_FORMATS}"
        )

    return config
