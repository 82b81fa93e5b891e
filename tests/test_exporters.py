import pandas as pd
import rispy

from bibrank.exporters.csv_exporter import export_csv
from bibrank.exporters.ris_exporter import export_ris
from bibrank.models import EMPTY_METRICS, Author, MetricRecord, Publication

RANKED = [
    (
        Publication(record_identifier="oai:x:1", title="Top Paper", date="2022-03",
                    journal_title="Annals of Samples", doi="10.1/top", issn="2345-6789",
                    authors=[Author("O'Neil", "Carla")]),
        MetricRecord(title="Annals of Samples", year=2022, sjr=0.5, h_index=12,
                     avg_citations=10.25, issns=("23456789",), source_id=202),
    ),
    (Publication(title="Bottom Paper"), EMPTY_METRICS),
]


def test_export_csv(tmp_path):
    path = export_csv(RANKED, str(tmp_path / "out" / "ranking.csv"))

    df = pd.read_csv(path, sep=";", encoding="utf-8-sig", keep_default_na=False)
    assert list(df["rank"]) == [1, 2]
    assert list(df["title"]) == ["Top Paper", "Bottom Paper"]
    assert df.loc[0, "citation_key"] == "ONeil2022"
    assert df.loc[0, "authors"] == "O'Neil, Carla"
    assert df.loc[0, "avg_citations"] == 10.25
    assert df.loc[1, "avg_citations"] == 0.0
    assert df.loc[1, "metrics_year"] == ""


def test_export_ris(tmp_path):
    path = export_ris(RANKED, str(tmp_path / "ranking.ris"))

    with open(path, encoding="utf-8") as f:
        entries = rispy.load(f)

    assert len(entries) == 2
    top = entries[0]
    assert top["type_of_reference"] == "JOUR"
    assert top["title"] == "Top Paper"
    assert top["authors"] == ["O'Neil, Carla"]
    assert top["secondary_title"] == "Annals of Samples"
    assert top["year"] == "2022"
    assert top["doi"] == "10.1/top"
    assert top["accession_number"] == "oai:x:1"
    assert "Average citations: 10.250000" in top["notes"]
    assert entries[1]["title"] == "Bottom Paper"
