"""
Tokenize a file or a directory of documents.

This script is a convenience wrapper that:

- loads .txt and .pdf documents from the given source (or the source
  configured in config/data.yaml)
- builds the token pipeline from the "preprocessing" section of
  config/data.yaml
- logs the number of tokens produced for each document
- writes one row per token to a CSV file under paths.results_dir

Usage (from project root):

    python -m scripts.run_tokenizer --source data/raw
    # or
    python scripts/run_tokenizer.py --source data/raw/report.pdf
"""

from __future__ import annotations

import argparse
import os

from tokenpipe.data.documents import load_documents
from tokenpipe.features.preprocessing import (
    build_pipeline,
    count_tokens_per_document,
    documents_to_frame,
)
from tokenpipe.utils.run_utils import ensure_dir_exists, get_logger, load_run_config


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Tokenize documents with the configured pipeline."
    )
    parser.add_argument(
        "--source",
        type=str,
        default=None,
        help="File or directory to tokenize (default: documents.source in the data config).",
    )
    parser.add_argument(
        "--data-config",
        type=str,
        default="config/data.yaml",
        help="Path to data config YAML (default: config/data.yaml).",
    )
    parser.add_argument(
        "--run-config",
        type=str,
        default="config/run.yaml",
        help="Path to run config YAML (default: config/run.yaml).",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="tokens.csv",
        help="Output CSV file name, written under paths.results_dir (default: tokens.csv).",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()

    run_cfg = load_run_config(args.run_config)
    logger = get_logger(
        name="run_tokenizer",
        config=run_cfg,
        log_file_suffix="tokenizer",
    )

    logger.info("=" * 80)
    logger.info("Starting tokenization.")
    logger.info("Configs: data=%s, run=%s", args.data_config, args.run_config)

    loader = load_documents(source=args.source, config_path=args.data_config)
    logger.info("Loaded %d document(s) from %s.", len(loader), loader.source)

    pipeline = build_pipeline(args.data_config)
    logger.info("Pipeline: %r", pipeline)

    documents = list(loader)
    tokens_df = documents_to_frame(documents, pipeline)

    counts = count_tokens_per_document(documents, tokens_df)
    for document in documents:
        logger.info(
            "  %s: %d token(s)",
            document.document_name,
            counts.loc[document.document_id],
        )
    if tokens_df.empty:
        logger.warning("Tokenization finished, but no tokens were produced.")

    results_dir = (run_cfg.get("paths", {}) or {}).get("results_dir", "outputs/results")
    ensure_dir_exists(results_dir)
    output_path = os.path.join(results_dir, args.output)
    tokens_df.to_csv(output_path, index=False)

    logger.info("Wrote %d token row(s) to %s", len(tokens_df), output_path)
    logger.info("Tokenization run completed.")


if __name__ == "__main__":
    main()
