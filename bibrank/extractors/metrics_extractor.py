"""Leitor da tabela CSV de métricas de periódicos (SJR, h-index, citações médias).

Formato esperado (cabeçalho + 8 colunas, nesta ordem):
  title, field, year, sjr, h_index, avg_citations, issn, sourceid

A coluna de ISSN contém uma lista separada por vírgulas, por exemplo
"15424863, 00079235". Cada ISSN vira uma chave da tabela; quando o mesmo
ISSN aparece em mais de uma linha, prevalece o registro do ano mais recente.
"""

import csv
import logging
import re
from typing import List, Optional

from bibrank.config import Config
from bibrank.extractors.base import BaseExtractor
from bibrank.models import MetricRecord, MetricsTable

logger = logging.getLogger(__name__)

COLUMNS = ["title", "field", "year", "sjr", "h_index", "avg_citations", "issn", "sourceid"]

# Sentinela para colunas opcionais vazias
MISSING_SCORE = -1.0

_INT_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
    re.IGNORECASE,
)
_WHITESPACE_RE = re.compile(r"\s+")


class MetricsLoadError(ValueError):
    """Falha ao interpretar uma linha da tabela de métricas."""

    def __init__(self, message: str, column: str = "", line: int = 0, value: str = ""):
        super().__init__(message)
        self.column = column
        self.line = line
        self.value = value


def parse_issns(issn_string: str) -> List[str]:
    """Remove espaços, separa por vírgula e descarta itens vazios.

    Não normaliza hífens: " 1234-5678, 2345-6789 " → ["1234-5678", "2345-6789"].
    """
    cleaned = _WHITESPACE_RE.sub("", issn_string)
    return [issn for issn in cleaned.split(",") if issn]


def _parse_int(value: str, column: str, line: int) -> int:
    if not _INT_RE.fullmatch(value):
        raise MetricsLoadError(
            f"Erro ao interpretar a coluna '{column}' na linha {line}: {value!r} não é inteiro",
            column=column, line=line, value=value,
        )
    return int(value)


def _parse_optional_float(value: str, column: str, line: int) -> float:
    if value == "":
        return MISSING_SCORE
    if not _FLOAT_RE.fullmatch(value):
        raise MetricsLoadError(
            f"Erro ao interpretar a coluna '{column}' na linha {line}: {value!r} não é numérico",
            column=column, line=line, value=value,
        )
    return float(value)


def parse_metrics_row(row: List[str], line: int) -> MetricRecord:
    """Converte uma linha do CSV (já separada em colunas) em MetricRecord."""
    if len(row) != len(COLUMNS):
        raise MetricsLoadError(
            f"Linha {line}: esperadas {len(COLUMNS)} colunas, encontradas {len(row)}",
            line=line,
        )

    return MetricRecord(
        title=row[0],
        field_code=_parse_int(row[1], "field", line),
        year=_parse_int(row[2], "year", line),
        sjr=_parse_optional_float(row[3], "sjr", line),
        h_index=_parse_int(row[4], "h_index", line),
        avg_citations=_parse_optional_float(row[5], "avg_citations", line),
        issns=tuple(parse_issns(row[6])),
        source_id=_parse_int(row[7], "sourceid", line),
    )


class MetricsExtractor(BaseExtractor):
    """Carrega a tabela de métricas em memória, indexada por ISSN."""

    def __init__(self, config: Config):
        super().__init__(config)
        self.table = MetricsTable()

    def extract(self, path: str) -> MetricsTable:
        self.source_path = str(path)
        self.records_read = 0
        table = MetricsTable()

        logger.info("Carregando métricas de periódicos: %s", path)
        with open(path, "r", encoding=self.config.metrics.encoding, newline="") as f:
            reader = csv.reader(f, delimiter=self.config.metrics.delimiter)
            try:
                header = next(reader, None)
                if header is None:
                    raise MetricsLoadError(f"Arquivo de métricas vazio (sem cabeçalho): {path}")

                for row in reader:
                    if not row:
                        continue
                    record = parse_metrics_row(row, reader.line_num)
                    self.records_read += 1
                    for issn in record.issns:
                        table.insert(issn, record)
            except csv.Error as e:
                raise MetricsLoadError(
                    f"Erro de leitura do CSV na linha {reader.line_num}: {e}",
                    line=reader.line_num,
                ) from e

        self.table = table
        self._warn_unmatchable_keys()
        logger.info(
            "Métricas carregadas: %d linhas, %d ISSNs distintos",
            self.records_read,
            len(table),
        )
        return table

    def _warn_unmatchable_keys(self) -> None:
        """Avisa sobre chaves com caracteres não numéricos (a busca usa só dígitos)."""
        unmatchable = [issn for issn in self.table if not issn.isdigit()]
        if unmatchable:
            logger.warning(
                "%d ISSNs da tabela contêm caracteres não numéricos (ex.: %s) e nunca "
                "serão encontrados pela busca normalizada",
                len(unmatchable),
                unmatchable[0],
            )

    def get_stats(self) -> dict:
        stats = super().get_stats()
        stats["issn_keys"] = len(self.table)
        return stats


def load_metrics_csv(path: str, config: Optional[Config] = None) -> MetricsTable:
    """Atalho: carrega a tabela de métricas com a configuração informada (ou padrão)."""
    return MetricsExtractor(config or Config()).extract(path)
