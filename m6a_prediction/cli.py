"""Command-line interface for m6A site prediction.

Provides subcommands:
- batch: Predict every site in a CSV/TSV/parquet feature table
- single: Predict one site from feature values given as options

Examples
--------
    m6a-predict batch --input sites.csv --model rf_fit.joblib --output predictions.csv
    m6a-predict single --model rf_fit.joblib --gc-content 0.5 --rna-type mRNA \\
        --rna-region CDS --exon-length 10 --distance-to-junction 8 \\
        --evolutionary-conservation 0.5 --dna-5mer GGACA
"""

import argparse
import logging
import sys
from typing import List, Optional

from .core.validators import M6APredictionError
from .inference.io_utils import read_feature_table, write_predictions
from .inference.predictor import M6APredictor
from .system.config import load_config

logger = logging.getLogger(__name__)


def _build_predictor(args):
    cfg = load_config(args.config)
    if args.model is not None:
        cfg.model_path = args.model
    if args.threshold is not None:
        cfg.positive_threshold = args.threshold
    if cfg.model_path is None:
        raise FileNotFoundError(
            "No classifier artifact configured: pass --model or set M6A_MODEL_PATH"
        )
    return M6APredictor.from_config(cfg), cfg


def cmd_batch(args) -> int:
    """Predict a whole feature table."""
    predictor, cfg = _build_predictor(args)
    feature_df = read_feature_table(args.input)
    logger.info(f"Read {feature_df.shape[0]} sites from {args.input}")

    result = predictor.predict(feature_df)

    if args.output:
        write_predictions(result, args.output)
    else:
        result.to_csv(sys.stdout, sep=cfg.output_sep, index=False)
    return 0


def cmd_single(args) -> int:
    """Predict one site."""
    predictor, _ = _build_predictor(args)
    prediction = predictor.predict_site(
        gc_content=args.gc_content,
        RNA_type=args.rna_type,
        RNA_region=args.rna_region,
        exon_length=args.exon_length,
        distance_to_junction=args.distance_to_junction,
        evolutionary_conservation=args.evolutionary_conservation,
        DNA_5mer=args.dna_5mer,
    )
    print(f"predicted_m6A_prob\t{prediction.predicted_m6A_prob:.6g}")
    print(f"predicted_m6A_status\t{prediction.predicted_m6A_status}")
    return 0


def _add_common_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--model",
        type=str,
        default=None,
        help="Classifier artifact file or directory (default: from config)",
    )
    parser.add_argument(
        "--threshold",
        type=float,
        default=None,
        help="Positive probability threshold (default: from config, 0.5)",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="YAML config file (default: packaged m6a_prediction.yaml)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="m6a-predict",
        description="Predict m6A modification status from sequence and genomic features",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # batch command
    batch_parser = subparsers.add_parser(
        "batch",
        help="Predict all sites in a feature table",
    )
    batch_parser.add_argument(
        "--input",
        type=str,
        required=True,
        help="Feature table (.csv, .tsv or .parquet)",
    )
    batch_parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output file (.csv or .tsv); stdout if omitted",
    )
    _add_common_args(batch_parser)
    batch_parser.set_defaults(func=cmd_batch)

    # single command
    single_parser = subparsers.add_parser(
        "single",
        help="Predict one site from feature values",
    )
    single_parser.add_argument("--gc-content", type=float, required=True)
    single_parser.add_argument("--rna-type", type=str, required=True,
                               help="mRNA, lincRNA, lncRNA or pseudogene")
    single_parser.add_argument("--rna-region", type=str, required=True,
                               help="CDS, intron, 3'UTR or 5'UTR")
    single_parser.add_argument("--exon-length", type=float, required=True)
    single_parser.add_argument("--distance-to-junction", type=float, required=True)
    single_parser.add_argument("--evolutionary-conservation", type=float, required=True)
    single_parser.add_argument("--dna-5mer", type=str, required=True,
                               help="Nucleotide context, e.g. GGACA")
    _add_common_args(single_parser)
    single_parser.set_defaults(func=cmd_single)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
    )

    if not getattr(args, "func", None):
        parser.print_help()
        return 1

    try:
        return args.func(args)
    except (M6APredictionError, FileNotFoundError) as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
