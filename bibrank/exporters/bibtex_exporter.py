"""Exportador de publicações para entradas BibTeX com as métricas do periódico."""

import calendar
import logging
import re
from datetime import datetime
from typing import Iterable, List, Optional, TextIO, Tuple

from bibrank.models import Author, MetricRecord, Publication

logger = logging.getLogger(__name__)

_KEY_INVALID_RE = re.compile(r"[^A-Za-z0-9]")
_FULL_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
_YEAR_MONTH_RE = re.compile(r"[0-9]{4}-[0-9]{2}")


def create_citation_key(pub: Publication) -> str:
    """Sobrenome do primeiro autor + ano, apenas com letras ASCII e dígitos."""
    author_name = "Unknown"
    if pub.authors:
        author_name = pub.authors[0].family_names

    year = "0000"
    if len(pub.date) >= 4:
        year = pub.date[:4]

    return _KEY_INVALID_RE.sub("", f"{author_name}{year}")


def format_authors(authors: List[Author]) -> str:
    return " and ".join(f"{a.family_names}, {a.first_names}" for a in authors)


def parse_publication_date(date: str) -> Optional[datetime]:
    """Interpreta 'YYYY-MM-DD' ou, em seguida, 'YYYY-MM'. Retorna None se nenhum servir."""
    for pattern, fmt in ((_FULL_DATE_RE, "%Y-%m-%d"), (_YEAR_MONTH_RE, "%Y-%m")):
        if not pattern.fullmatch(date):
            continue
        try:
            return datetime.strptime(date, fmt)
        except ValueError:
            continue
    return None


def _date_fields(date: str) -> List[Tuple[str, str]]:
    if not date:
        return []
    parsed = parse_publication_date(date)
    if parsed is not None:
        return [
            ("year", str(parsed.year)),
            ("month", calendar.month_name[parsed.month].lower()),
        ]
    if len(date) >= 4:
        return [("year", date[:4])]
    return []


def to_bibtex(pub: Publication, metrics: MetricRecord) -> str:
    """Gera a entrada @article; nunca falha, mesmo com campos vazios."""
    lines = [f"@article{{{create_citation_key(pub)},\n"]

    def add(name: str, value: str) -> None:
        lines.append(f"  {name} = {{{value}}},\n")

    if pub.authors:
        add("author", format_authors(pub.authors))
    if pub.title:
        add("title", f"{{{pub.title}}}")
    if pub.journal_title:
        add("journal", pub.journal_title)
    for name, value in _date_fields(pub.date):
        add(name, value)
    if pub.volume:
        add("volume", pub.volume)
    if pub.issue:
        add("number", pub.issue)
    if pub.doi:
        add("doi", pub.doi)
    if pub.issn:
        add("issn", pub.issn)

    # Métricas sempre presentes, mesmo com valores padrão
    add("sjr", f"{metrics.sjr:f}")
    add("avg_citations", f"{metrics.avg_citations:f}")
    add("h_index", str(metrics.h_index))

    output = "".join(lines)
    if output.endswith(",\n"):
        output = output[: -len(",\n")]
    return output + "\n}\n"


def export_bibtex(ranked: Iterable[Tuple[Publication, MetricRecord]], stream: TextIO) -> int:
    """Escreve as entradas no stream, separadas por linha em branco. Retorna a contagem."""
    count = 0
    for pub, metrics in ranked:
        stream.write(to_bibtex(pub, metrics))
        stream.write("\n")
        count += 1
    logger.info("BibTeX exportado: %d entradas", count)
    return count
