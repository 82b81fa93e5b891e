"""Exportador do ranking de publicações para CSV."""

import csv
import logging
from pathlib import Path
from typing import List, Tuple

import pandas as pd

from bibrank.exporters.bibtex_exporter import create_citation_key, format_authors
from bibrank.models import MetricRecord, Publication

logger = logging.getLogger(__name__)

COLUMNS = [
    "rank", "citation_key", "title", "subtitle", "authors", "journal", "date",
    "volume", "issue", "doi", "issn", "url", "language", "type",
    "sjr", "avg_citations", "h_index", "metrics_year", "metrics_source_id",
]


def _build_dataframe(ranked: List[Tuple[Publication, MetricRecord]]) -> pd.DataFrame:
    """Converte os pares (publicação, métricas) em DataFrame, preservando a ordem."""
    rows = []
    for position, (pub, metrics) in enumerate(ranked, start=1):
        rows.append({
            "rank": position,
            "citation_key": create_citation_key(pub),
            "title": pub.title,
            "subtitle": pub.subtitle,
            "authors": format_authors(pub.authors),
            "journal": pub.journal_title,
            "date": pub.date,
            "volume": pub.volume,
            "issue": pub.issue,
            "doi": pub.doi,
            "issn": pub.issn,
            "url": pub.url,
            "language": pub.language,
            "type": pub.type,
            "sjr": metrics.sjr,
            "avg_citations": metrics.avg_citations,
            "h_index": metrics.h_index,
            "metrics_year": metrics.year or "",
            "metrics_source_id": metrics.source_id or "",
        })
    return pd.DataFrame(rows, columns=COLUMNS)


def export_csv(ranked: List[Tuple[Publication, MetricRecord]], output_path: str) -> str:
    """
    Exporta o ranking para CSV com encoding UTF-8-BOM (compatível com Excel Windows).

    Retorna o caminho do arquivo gerado.
    """
    df = _build_dataframe(ranked)

    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(output_path, index=False, encoding="utf-8-sig", sep=";",
              quoting=csv.QUOTE_ALL)

    logger.info("CSV exportado: %s (%d registros)", output_path, len(ranked))
    return output_path
