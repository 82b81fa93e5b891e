from bibrank.models import EMPTY_METRICS, MetricRecord, MetricsTable, Publication
from bibrank.ranking.ranker import join_metrics, rank_publications, rank_with_metrics


def _table(*entries):
    table = MetricsTable()
    for issn, avg in entries:
        table.insert(issn, MetricRecord(title=issn, year=2020, avg_citations=avg, issns=(issn,)))
    return table


def test_orders_by_descending_average_citations():
    table = _table(("11111111", 5.0), ("33333333", 10.0))
    a = Publication(id="A", issn="1111-1111")
    b = Publication(id="B", issn="2222-2222")
    c = Publication(id="C", issn="3333-3333")

    ranked = rank_publications([a, b, c], table)

    assert [p.id for p in ranked] == ["C", "A", "B"]


def test_ties_keep_input_order():
    table = _table(("11111111", 2.0))
    pubs = [
        Publication(id="x", issn="0000-0000"),
        Publication(id="y", issn="11111111"),
        Publication(id="z", issn=""),
        Publication(id="w", issn="1111-1111"),
    ]
    assert [p.id for p in rank_publications(pubs, table)] == ["y", "w", "x", "z"]


def test_missing_metrics_resolve_to_zero_record():
    table = _table(("11111111", 2.0))
    [(pub, metrics)] = join_metrics([Publication(id="none", issn="9999-9999")], table)

    assert metrics is EMPTY_METRICS
    assert metrics.avg_citations == 0.0
    assert metrics.sjr == 0.0
    assert metrics.h_index == 0


def test_missing_metrics_rank_above_negative_sentinel():
    table = MetricsTable()
    table.insert("11111111", MetricRecord(year=2020, avg_citations=-1.0))
    pubs = [Publication(id="sentinel", issn="11111111"), Publication(id="missing", issn="2")]

    assert [p.id for p in rank_publications(pubs, table)] == ["missing", "sentinel"]


def test_hyphenated_table_keys_do_not_match():
    table = _table(("1234-5678", 50.0))
    [(_, metrics)] = join_metrics([Publication(issn="1234-5678")], table)
    assert metrics is EMPTY_METRICS


def test_no_publication_is_dropped():
    table = _table(("11111111", 1.0))
    pubs = [Publication(id=str(i), issn="11111111" if i % 2 else "") for i in range(10)]

    ranked = rank_with_metrics(pubs, table)

    assert len(ranked) == 10
    assert sorted(p.id for p, _ in ranked) == sorted(p.id for p in pubs)


def test_empty_input():
    assert rank_publications([], MetricsTable()) == []
