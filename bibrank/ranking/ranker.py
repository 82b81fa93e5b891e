"""Associação publicação → métricas do periódico e ordenação por citações médias."""

import logging
from typing import List, Tuple

from bibrank.models import EMPTY_METRICS, MetricRecord, MetricsTable, Publication

logger = logging.getLogger(__name__)

RankedPublication = Tuple[Publication, MetricRecord]


def resolve_metrics(pub: Publication, table: MetricsTable) -> MetricRecord:
    """Métricas do periódico da publicação, ou o registro zerado se não houver."""
    metrics = table.lookup(pub.issn)
    return metrics if metrics is not None else EMPTY_METRICS


def join_metrics(publications: List[Publication], table: MetricsTable) -> List[RankedPublication]:
    """Associa cada publicação às métricas do seu ISSN, mantendo a ordem de entrada."""
    joined = []
    matched = 0
    for pub in publications:
        metrics = resolve_metrics(pub, table)
        if metrics is not EMPTY_METRICS:
            matched += 1
        joined.append((pub, metrics))

    logger.info(
        "Junção por ISSN: %d com métricas, %d sem métricas",
        matched,
        len(publications) - matched,
    )
    return joined


def rank_with_metrics(publications: List[Publication], table: MetricsTable) -> List[RankedPublication]:
    """Pares (publicação, métricas) em ordem decrescente de citações médias.

    A ordenação é estável: empates mantêm a ordem original.
    """
    joined = join_metrics(publications, table)
    return sorted(joined, key=lambda pair: pair[1].avg_citations, reverse=True)


def rank_publications(publications: List[Publication], table: MetricsTable) -> List[Publication]:
    """Mesma lista de entrada, reordenada; nenhuma publicação é descartada."""
    return [pub for pub, _ in rank_with_metrics(publications, table)]
