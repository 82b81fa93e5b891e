"""Exportador do ranking de publicações para formato RIS."""

import logging
from pathlib import Path
from typing import List, Tuple

import rispy

from bibrank.exporters.bibtex_exporter import create_citation_key
from bibrank.models import MetricRecord, Publication

logger = logging.getLogger(__name__)


def _record_to_ris_entry(pub: Publication, metrics: MetricRecord) -> dict:
    """Converte publicação + métricas para dicionário no formato rispy."""
    entry = {
        "type_of_reference": "JOUR",
        "id": create_citation_key(pub),
        "title": pub.title,
    }

    if pub.authors:
        entry["authors"] = [
            f"{a.family_names}, {a.first_names}" if a.first_names else a.family_names
            for a in pub.authors
        ]

    if pub.journal_title:
        entry["secondary_title"] = pub.journal_title

    if len(pub.date) >= 4:
        entry["year"] = pub.date[:4]

    if pub.volume:
        entry["volume"] = pub.volume

    if pub.issue:
        entry["number"] = pub.issue

    if pub.doi:
        entry["doi"] = pub.doi

    if pub.language:
        entry["language"] = pub.language

    if pub.issn:
        entry["issn"] = pub.issn

    if pub.url:
        entry["urls"] = [pub.url]

    if pub.record_identifier:
        entry["accession_number"] = pub.record_identifier

    entry["notes"] = [
        f"SJR: {metrics.sjr:f}",
        f"Average citations: {metrics.avg_citations:f}",
        f"h-index: {metrics.h_index}",
    ]

    return entry


def export_ris(ranked: List[Tuple[Publication, MetricRecord]], output_path: str) -> str:
    """
    Exporta o ranking para arquivo RIS (importável em Zotero, Mendeley, EndNote).

    Retorna o caminho do arquivo gerado.
    """
    entries = [_record_to_ris_entry(pub, metrics) for pub, metrics in ranked]

    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        rispy.dump(entries, f)

    logger.info("RIS exportado: %s (%d registros)", output_path, len(ranked))
    return output_path
