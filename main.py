"""
Ranking bibliográfico — publicações OAI-PMH ordenadas por métricas do periódico

Associa cada publicação de uma exportação OAI-PMH às métricas do seu periódico
(tabela CSV indexada por ISSN), ordena por citações médias e imprime as
entradas em BibTeX na saída padrão.

Uso:
    python main.py publicacoes.xml metricas.csv               # BibTeX em stdout
    python main.py publicacoes.xml metricas.csv > ranking.bib
    python main.py publicacoes.xml metricas.csv --verbose     # Logs detalhados (stderr)
    python main.py publicacoes.xml metricas.csv --config config.yaml
"""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from bibrank.config import Config, load_config
from bibrank.exporters.bibtex_exporter import export_bibtex
from bibrank.exporters.csv_exporter import export_csv
from bibrank.exporters.ris_exporter import export_ris
from bibrank.extractors.metrics_extractor import MetricsExtractor
from bibrank.extractors.oai_extractor import OaiExtractor
from bibrank.models import EMPTY_METRICS
from bibrank.ranking.ranker import rank_with_metrics
from bibrank.run_log import (
    InputStats,
    RunLog,
    print_summary,
    save_run_log,
    setup_logging,
)

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Ordena publicações OAI-PMH pelas citações médias do periódico "
        "e imprime as entradas em BibTeX.",
    )
    parser.add_argument(
        "publications",
        help="Arquivo XML OAI-PMH (ListRecords) com as publicações",
    )
    parser.add_argument(
        "metrics",
        help="Arquivo CSV com as métricas dos periódicos (8 colunas, com cabeçalho)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Caminho para o arquivo de configuração YAML (opcional)",
    )
    parser.add_argument(
        "--output-dir",
        default=None,
        help="Diretório para as exportações CSV/RIS (sobrescreve config.yaml)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Ativa logs detalhados (DEBUG) no console",
    )
    return parser.parse_args(argv)


def _fail(message: str) -> None:
    print(message, file=sys.stderr)
    sys.exit(1)


def _write_exports(ranked, config: Config, args: argparse.Namespace, run_log: RunLog) -> None:
    """Grava as exportações adicionais (CSV/RIS) configuradas em output.formats."""
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    output_dir = Path(args.output_dir or config.output.directory)
    if config.output.timestamp:
        output_dir = output_dir / timestamp
    output_dir.mkdir(parents=True, exist_ok=True)
    logger.info("Diretório de saída: %s", output_dir)

    if "csv" in config.output.formats:
        run_log.output_csv = export_csv(ranked, str(output_dir / f"ranking_{timestamp}.csv"))

    if "ris" in config.output.formats:
        run_log.output_ris = export_ris(ranked, str(output_dir / f"ranking_{timestamp}.ris"))

    run_log.execution_end = datetime.now().isoformat()
    save_run_log(run_log, str(output_dir / f"run_log_{timestamp}.json"))


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)

    # Carregar configuração
    try:
        config = load_config(args.config)
    except (FileNotFoundError, ValueError) as e:
        _fail(f"Erro de configuração: {e}")

    setup_logging(config.logging.file or None, verbose=args.verbose, level=config.logging.level)
    logger.info("Iniciando ranking bibliográfico")

    run_log = RunLog(execution_start=datetime.now().isoformat())

    # === Métricas ===
    metrics_extractor = MetricsExtractor(config)
    try:
        table = metrics_extractor.extract(args.metrics)
    except (OSError, ValueError) as e:
        logger.debug("Falha ao carregar métricas", exc_info=True)
        _fail(f"Erro ao carregar métricas de {args.metrics}: {e}")

    metrics_stats = metrics_extractor.get_stats()
    run_log.inputs.append(InputStats(
        input_name="métricas",
        path=metrics_stats["source"],
        records_read=metrics_stats["records_read"],
    ))
    run_log.metrics_rows = metrics_stats["records_read"]
    run_log.issn_keys = metrics_stats["issn_keys"]

    # === Publicações ===
    oai_extractor = OaiExtractor(config)
    try:
        publications = oai_extractor.extract(args.publications)
    except (OSError, ValueError) as e:
        logger.debug("Falha ao ler publicações", exc_info=True)
        _fail(f"Erro ao ler publicações de {args.publications}: {e}")

    oai_stats = oai_extractor.get_stats()
    run_log.inputs.append(InputStats(
        input_name="publicações",
        path=oai_stats["source"],
        records_read=oai_stats["records_read"],
    ))
    run_log.publications = len(publications)

    # === Ranking ===
    ranked = rank_with_metrics(publications, table)
    run_log.with_metrics = sum(1 for _, metrics in ranked if metrics is not EMPTY_METRICS)
    run_log.without_metrics = len(ranked) - run_log.with_metrics

    # === BibTeX ===
    run_log.bibtex_entries = export_bibtex(ranked, sys.stdout)
    sys.stdout.flush()

    # === Exportações adicionais ===
    if config.output.formats:
        try:
            _write_exports(ranked, config, args, run_log)
        except OSError as e:
            logger.debug("Falha ao gravar exportações", exc_info=True)
            _fail(f"Erro ao gravar exportações: {e}")

    # === Resumo ===
    if args.verbose:
        print_summary(run_log)

    logger.info("Ranking concluído com sucesso.")


if __name__ == "__main__":
    main()
