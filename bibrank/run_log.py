"""Logging estruturado e contadores da execução para rastreabilidade."""

import json
import logging
import sys
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import List, Optional, TextIO


@dataclass
class InputStats:
    """Estatísticas de um arquivo de entrada."""
    input_name: str = ""
    path: str = ""
    records_read: int = 0


@dataclass
class RunLog:
    """Registro completo de uma execução do ranking."""
    execution_start: str = ""
    execution_end: str = ""
    inputs: List[InputStats] = field(default_factory=list)
    metrics_rows: int = 0
    issn_keys: int = 0
    publications: int = 0
    with_metrics: int = 0
    without_metrics: int = 0
    bibtex_entries: int = 0
    output_csv: str = ""
    output_ris: str = ""


def setup_logging(log_file: Optional[str] = None, verbose: bool = False,
                  level: str = "INFO") -> None:
    """Configura logging com handler de console (stderr) e, opcionalmente, de arquivo.

    A saída padrão fica reservada para as entradas BibTeX.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Limpar handlers existentes
    root_logger.handlers.clear()

    # Handler de arquivo (detalhado)
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_fmt = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        file_handler.setFormatter(file_fmt)
        root_logger.addHandler(file_handler)

    # Handler de console
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG if verbose else getattr(logging, level))
    console_fmt = logging.Formatter("%(asctime)s [%(levelname)s] %(message)s", datefmt="%H:%M:%S")
    console_handler.setFormatter(console_fmt)
    root_logger.addHandler(console_handler)


def save_run_log(run_log: RunLog, output_path: str) -> str:
    """Salva o log da execução como JSON."""
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(asdict(run_log), f, ensure_ascii=False, indent=2)
    logging.getLogger(__name__).info("Log de execução salvo: %s", output_path)
    return output_path


def print_summary(run_log: RunLog, stream: Optional[TextIO] = None) -> None:
    """Imprime resumo formatado (em stderr por padrão)."""
    out = stream or sys.stderr

    def emit(text: str = "") -> None:
        print(text, file=out)

    emit("\n" + "=" * 60)
    emit("  RESUMO DO RANKING")
    emit("=" * 60)

    for item in run_log.inputs:
        emit(f"\n  {item.input_name}: {item.path}")
        emit(f"    Registros lidos: {item.records_read}")

    emit(f"\n  {'─' * 40}")
    emit(f"  Linhas de métricas:      {run_log.metrics_rows}")
    emit(f"  ISSNs na tabela:         {run_log.issn_keys}")
    emit(f"  Publicações:             {run_log.publications}")
    emit(f"  Com métricas:            {run_log.with_metrics}")
    emit(f"  Sem métricas:            {run_log.without_metrics}")
    emit(f"  Entradas BibTeX:         {run_log.bibtex_entries}")

    if run_log.output_csv or run_log.output_ris:
        emit("\n  Arquivos gerados:")
        if run_log.output_csv:
            emit(f"    CSV: {run_log.output_csv}")
        if run_log.output_ris:
            emit(f"    RIS: {run_log.output_ris}")

    emit("=" * 60 + "\n")
