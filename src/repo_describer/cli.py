"""Command line entry point: ``repo-describer PATH``."""

import argparse
import logging
import sys
from pathlib import Path

from repo_describer import config, core, llm
from repo_describer.errors import DescriberError

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="repo-describer",
        description="Scan a directory and generate a project context and description with an LLM.",
    )
    parser.add_argument("path", help="Path to the directory to describe.")
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Root directory for generated artifacts (defaults to OUTPUT_ROOT or ./data).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug output, including the initial prompt.",
    )
    return parser


def main(argv: list[str] | None = None, client: llm.TextGenerationClient | None = None) -> int:
    args = _build_parser().parse_args(argv)
    if args.verbose:
        logging.getLogger("repo_describer").setLevel(logging.DEBUG)

    try:
        cfg = config.load_config()
    except config.ConfigError as exc:
        logger.error(f"Configuration error: {exc}")
        return 1
    if args.output_dir is not None:
        cfg = cfg.model_copy(update={"output_root": args.output_dir})

    try:
        result = core.run_pipeline(args.path, cfg, client or llm.OpenAIClient(cfg.llm))
    except DescriberError as exc:
        logger.error(f"{type(exc).__name__}: {exc.message}")
        return 1

    logger.info(f"Project context written to {result.context_path}")
    logger.info(f"Project description written to {result.description_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
