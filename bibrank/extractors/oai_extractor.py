"""Leitor de exportações OAI-PMH (ListRecords) com descrições de publicações.

Estrutura esperada (namespaces são ignorados na comparação de nomes):

  OAI-PMH/ListRecords/record
    header/{identifier, datestamp, setSpec}
    metadata/Publication[@id]
      Type, Language, Title, Subtitle, PublicationDate,
      Volume, Issue, DOI, ISSN, URL,
      PublishedIn/Publication/{Type, Title},
      Authors/Author/Person/PersonName/{FamilyNames, FirstNames}
"""

import logging
from typing import IO, List, Optional, Union

from defusedxml import DefusedXmlException
from defusedxml import ElementTree as ET

from bibrank.config import Config
from bibrank.extractors.base import BaseExtractor
from bibrank.models import Author, Publication

logger = logging.getLogger(__name__)

ROOT_TAG = "OAI-PMH"


class PublicationParseError(ValueError):
    """Documento de publicações malformado ou fora do esquema OAI-PMH."""


def _local_name(tag) -> str:
    """'{http://www.openarchives.org/OAI/2.0/}record' → 'record'."""
    if not isinstance(tag, str):
        return ""
    return tag.rsplit("}", 1)[-1]


def _child(elem, name: str):
    """Último filho com o nome local informado (repetições sobrescrevem as anteriores)."""
    matches = _children(elem, name)
    return matches[-1] if matches else None


def _children(elem, name: str) -> list:
    if elem is None:
        return []
    return [child for child in elem if _local_name(child.tag) == name]


def _path(elem, *names: str):
    for name in names:
        elem = _child(elem, name)
    return elem


def _text(elem) -> str:
    """Texto próprio do elemento, sem o conteúdo de elementos filhos."""
    if elem is None:
        return ""
    parts = [elem.text or ""]
    parts.extend(child.tail or "" for child in elem)
    return "".join(parts)


def _parse_author(author_elem) -> Author:
    name = _path(author_elem, "Person", "PersonName")
    return Author(
        family_names=_text(_child(name, "FamilyNames")),
        first_names=_text(_child(name, "FirstNames")),
    )


def parse_record(record_elem) -> Publication:
    """Converte um elemento <record> em Publication (campos ausentes ficam vazios)."""
    header = _child(record_elem, "header")
    pub = _path(record_elem, "metadata", "Publication")
    journal = _path(pub, "PublishedIn", "Publication")

    return Publication(
        record_identifier=_text(_child(header, "identifier")),
        datestamp=_text(_child(header, "datestamp")),
        set_spec=_text(_child(header, "setSpec")),
        id=pub.get("id", "") if pub is not None else "",
        type=_text(_child(pub, "Type")),
        language=_text(_child(pub, "Language")),
        title=_text(_child(pub, "Title")),
        subtitle=_text(_child(pub, "Subtitle")),
        journal_title=_text(_child(journal, "Title")),
        journal_type=_text(_child(journal, "Type")),
        date=_text(_child(pub, "PublicationDate")),
        volume=_text(_child(pub, "Volume")),
        issue=_text(_child(pub, "Issue")),
        doi=_text(_child(pub, "DOI")),
        issn=_text(_child(pub, "ISSN")),
        url=_text(_child(pub, "URL")),
        authors=[_parse_author(a) for a in _children(_child(pub, "Authors"), "Author")],
    )


def parse_publications(source: Union[str, IO]) -> List[Publication]:
    """Lê o documento completo e retorna as publicações na ordem de entrada.

    Qualquer erro de XML aborta a leitura inteira; não há resultado parcial.
    """
    try:
        tree = ET.parse(source)
    except ET.ParseError as e:
        raise PublicationParseError(f"XML malformado: {e}") from e
    except DefusedXmlException as e:
        raise PublicationParseError(f"XML rejeitado por conter construções proibidas: {e}") from e

    root = tree.getroot()
    if _local_name(root.tag) != ROOT_TAG:
        raise PublicationParseError(
            f"Elemento raiz inesperado: <{_local_name(root.tag)}> (esperado <{ROOT_TAG}>)"
        )

    list_records = _child(root, "ListRecords")
    if list_records is None:
        error = _child(root, "error")
        if error is not None:
            logger.warning(
                "Resposta OAI-PMH sem registros: %s (%s)",
                _text(error).strip(),
                error.get("code", ""),
            )
        else:
            logger.warning("Documento OAI-PMH sem elemento ListRecords")
        return []

    return [parse_record(rec) for rec in _children(list_records, "record")]


class OaiExtractor(BaseExtractor):
    """Extrai publicações de um arquivo XML OAI-PMH."""

    def extract(self, path: str) -> List[Publication]:
        self.source_path = str(path)
        logger.info("Lendo publicações OAI-PMH: %s", path)

        with open(path, "rb") as f:
            publications = parse_publications(f)

        self.records_read = len(publications)

        without_issn = sum(1 for p in publications if not p.issn)
        logger.info("OAI-PMH: %d publicações lidas", len(publications))
        if without_issn:
            logger.debug("%d publicações sem ISSN (não terão métricas)", without_issn)
        return publications


def load_publications(path: str, config: Optional[Config] = None) -> List[Publication]:
    """Atalho: lê as publicações com a configuração informada (ou padrão)."""
    return OaiExtractor(config or Config()).extract(path)
