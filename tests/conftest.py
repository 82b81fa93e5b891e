"""Fixtures compartilhadas: arquivos pequenos de métricas (CSV) e publicações (XML)."""

import textwrap

import pytest

METRICS_HEADER = "title,field,year,sjr,h_index,avg_citations,issn,sourceid\n"

METRICS_ROWS = (
    '"Journal of Testing",1700,2021,1.234,45,5.5,"12345678, 87654321",101\n'
    '"Annals of Samples",2600,2022,0.5,12,10.25,"23456789",202\n'
    '"Hyphen Review",1100,2022,,7,,"3456-7890",303\n'
)

OAI_NS = "http://www.openarchives.org/OAI/2.0/"
CERIF_NS = "https://www.openaire.eu/cerif-profile/1.1/"


def make_record(identifier, title="", date="", issn="", authors=(), doi="",
                journal="", volume="", issue=""):
    """Monta um <record> OAI-PMH com os campos informados (vazios são omitidos)."""
    parts = []
    if title:
        parts.append(f"<Title>{title}</Title>")
    if journal:
        parts.append(
            "<PublishedIn><Publication><Type>Journal</Type>"
            f"<Title>{journal}</Title></Publication></PublishedIn>"
        )
    if date:
        parts.append(f"<PublicationDate>{date}</PublicationDate>")
    for tag, value in (("Volume", volume), ("Issue", issue), ("DOI", doi), ("ISSN", issn)):
        if value:
            parts.append(f"<{tag}>{value}</{tag}>")
    if authors:
        names = "".join(
            "<Author><Person><PersonName>"
            f"<FamilyNames>{family}</FamilyNames><FirstNames>{first}</FirstNames>"
            "</PersonName></Person></Author>"
            for family, first in authors
        )
        parts.append(f"<Authors>{names}</Authors>")

    return (
        "<record>"
        f"<header><identifier>{identifier}</identifier>"
        "<datestamp>2024-01-10</datestamp><setSpec>publications</setSpec></header>"
        f'<metadata><Publication xmlns="{CERIF_NS}" id="{identifier}">'
        "<Type>Journal Article</Type><Language>en</Language>"
        + "".join(parts)
        + "</Publication></metadata></record>"
    )


def make_document(*records):
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        f'<OAI-PMH xmlns="{OAI_NS}">'
        "<responseDate>2024-01-10T10:00:00Z</responseDate>"
        '<request verb="ListRecords" metadataPrefix="oai_cerif_openaire">https://example.org/oai</request>'
        "<ListRecords>" + "".join(records) + "</ListRecords></OAI-PMH>"
    )


@pytest.fixture
def write_file(tmp_path):
    """Grava um arquivo de texto em tmp_path e retorna o caminho como str."""
    def _write(name, content):
        path = tmp_path / name
        path.write_text(textwrap.dedent(content), encoding="utf-8")
        return str(path)
    return _write


@pytest.fixture
def metrics_csv(write_file):
    return write_file("metrics.csv", METRICS_HEADER + METRICS_ROWS)


@pytest.fixture
def publications_xml(write_file):
    doc = make_document(
        make_record("pub-a", title="Alpha Study", date="2021-07-15", issn="1234-5678",
                    authors=[("Silva", "Ana"), ("Souza", "Bruno")], doi="10.1000/alpha",
                    journal="Journal of Testing", volume="12", issue="3"),
        make_record("pub-b", title="Beta Notes", date="2020", issn="9999-9999"),
        make_record("pub-c", title="Gamma Review", date="2022-03", issn="2345-6789",
                    authors=[("O'Neil", "Carla")]),
    )
    return write_file("publications.xml", doc)


@pytest.fixture(autouse=True)
def restore_root_logging():
    """main() reconfigura o logger raiz; restaura handlers e nível após cada teste."""
    import logging

    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
