"""Modelo de dados para publicações, métricas de periódicos e a tabela por ISSN."""

import re
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

_NON_DIGIT_RE = re.compile(r"[^0-9]")


@dataclass(frozen=True)
class MetricRecord:
    """Métricas de um periódico (uma linha da tabela CSV)."""

    title: str = ""
    field_code: int = 0
    year: int = 0
    sjr: float = 0.0               # -1.0 quando ausente no CSV
    h_index: int = 0
    avg_citations: float = 0.0     # -1.0 quando ausente no CSV
    issns: Tuple[str, ...] = ()    # impresso + eletrônico
    source_id: int = 0


# Registro "zero" usado quando a busca por ISSN não encontra o periódico
EMPTY_METRICS = MetricRecord()


def normalize_issn(issn: str) -> str:
    """Mantém apenas os dígitos do ISSN: '1234-5678' → '12345678'."""
    return _NON_DIGIT_RE.sub("", issn)


class MetricsTable:
    """Tabela de métricas indexada pelo ISSN bruto, como aparece no CSV.

    A inserção guarda a chave sem normalizar; a busca normaliza a consulta
    para apenas dígitos. Chaves com hífen, portanto, nunca são encontradas.
    """

    def __init__(self):
        self._entries: Dict[str, MetricRecord] = {}

    def insert(self, issn: str, record: MetricRecord) -> None:
        """Insere ou substitui, apenas se o ano do novo registro for maior."""
        existing = self._entries.get(issn)
        if existing is None or existing.year < record.year:
            self._entries[issn] = record

    def lookup(self, issn: str) -> Optional[MetricRecord]:
        return self._entries.get(normalize_issn(issn))

    def keys(self) -> List[str]:
        return list(self._entries)

    def __contains__(self, issn: object) -> bool:
        return issn in self._entries

    def __getitem__(self, issn: str) -> MetricRecord:
        return self._entries[issn]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


@dataclass
class Author:
    family_names: str = ""
    first_names: str = ""


@dataclass
class Publication:
    """Publicação extraída de um registro OAI-PMH."""

    # Cabeçalho OAI
    record_identifier: str = ""
    datestamp: str = ""
    set_spec: str = ""

    # Identidade
    id: str = ""
    type: str = ""
    language: str = ""

    # Dados bibliográficos
    title: str = ""
    subtitle: str = ""
    journal_title: str = ""
    journal_type: str = ""
    date: str = ""                 # texto livre: "YYYY-MM-DD", "YYYY-MM", ...
    volume: str = ""
    issue: str = ""
    doi: str = ""
    issn: str = ""
    url: str = ""
    authors: List[Author] = field(default_factory=list)
