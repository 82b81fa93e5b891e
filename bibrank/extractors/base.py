"""Classe abstrata base para extratores de arquivos de entrada."""

from abc import ABC, abstractmethod
from typing import Any

from bibrank.config import Config


class BaseExtractor(ABC):
    """Interface comum para os leitores de arquivos (métricas e publicações)."""

    def __init__(self, config: Config):
        self.config = config
        self.source_path: str = ""
        self.records_read: int = 0

    @abstractmethod
    def extract(self, path: str) -> Any:
        """Lê o arquivo inteiro e retorna a estrutura carregada."""

    def get_stats(self) -> dict:
        """Retorna estatísticas da leitura para o log de execução."""
        return {
            "extractor": self.__class__.__name__.replace("Extractor", ""),
            "source": self.source_path,
            "records_read": self.records_read,
        }
