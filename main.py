#!/usr/bin/env python3
"""
Article OCR Extraction System - Main Entry Point.

Command-line access to the article extraction pipeline.

Usage:
    Command Line:
        python main.py --input scan.png --debug
        python main.py --input scan.png --strict --output result.json
        python main.py --input catalogue.pdf --pdf-structured

    Python:
        from main import run_extraction
        result = run_extraction("scan.png")

Author: ML Engineering Team
Version: 1.0.0
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from config import ConfigurationManager, get_config
from article_ocr.utils.logger import ROOT_LOGGER_NAME, get_logger, setup_logger_from_config
from article_ocr.utils.helpers import ensure_directory
from article_ocr.utils.exceptions import ArticleOcrError

# Exit status when --strict rejects a low-confidence result
EXIT_LOW_CONFIDENCE = 2


def parse_arguments(argv: Optional[list] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed argument namespace.
    """
    parser = argparse.ArgumentParser(
        description="Article field extraction from scanned documents",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    OCR a scanned article sheet:
        python main.py --input scan.png

    Reject results below the strict confidence floor:
        python main.py --input scan.png --strict

    Per-page drafts from a text PDF, without OCR:
        python main.py --input catalogue.pdf --pdf-structured
        """
    )

    parser.add_argument(
        "--input", "-i",
        type=str,
        required=True,
        help="Image or PDF to process"
    )

    parser.add_argument(
        "--output", "-o",
        type=str,
        default=None,
        help="Write the JSON result to this file instead of stdout"
    )

    parser.add_argument(
        "--config", "-c",
        type=str,
        default=None,
        help="Path to custom configuration file"
    )

    parser.add_argument(
        "--pdf-structured",
        action="store_true",
        help="Read the PDF's embedded text page by page instead of running OCR"
    )

    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail when the document confidence is below the strict threshold"
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Include diagnostics in the result and enable debug logging"
    )

    return parser.parse_args(argv)


def initialize_system(args: argparse.Namespace) -> ConfigurationManager:
    """
    Load configuration and set up logging.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Initialized configuration manager.
    """
    config = ConfigurationManager(args.config)
    # stdout carries the JSON result unless --output is given
    logger = setup_logger_from_config(sys.stdout if args.output else sys.stderr)

    if args.debug:
        logging.getLogger(ROOT_LOGGER_NAME).setLevel(logging.DEBUG)

    logger.info(f"Article OCR {config.get('project.version', '1.0.0')} - input: {args.input}")
    return config


def run_extraction(
    input_path: str,
    debug: bool = False,
    pdf_structured: bool = False,
    config_path: Optional[str] = None
) -> Dict[str, Any]:
    """
    Run the extraction pipeline on one document.

    Args:
        input_path: Image or PDF path.
        debug: Include diagnostics in the result.
        pdf_structured: Use the PDF text path instead of OCR.
        config_path: Optional custom configuration file path.

    Returns:
        The result as a dictionary.

    Raises:
        InputError: On the PDF text path, if the file cannot be used.
    """
    ConfigurationManager(config_path)

    from article_ocr.pipeline import ArticleOcrService

    with ArticleOcrService() as service:
        if pdf_structured:
            return service.extract_pdf_structured(input_path).to_dict()
        return service.process_document(input_path, debug=debug).to_dict()


def write_output(result: Dict[str, Any], output_path: Optional[str]) -> None:
    payload = json.dumps(result, indent=2, ensure_ascii=False)

    if output_path is None:
        print(payload)
        return

    path = Path(output_path)
    ensure_directory(path.parent)
    path.write_text(payload, encoding="utf-8")
    get_logger(__name__).info(f"Result written to {path}")


def main(argv: Optional[list] = None) -> int:
    """
    Main function - entry point for command-line execution.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    try:
        args = parse_arguments(argv)
        initialize_system(args)
        logger = get_logger(__name__)

        result = run_extraction(
            input_path=args.input,
            debug=args.debug,
            pdf_structured=args.pdf_structured,
            config_path=args.config
        )
        write_output(result, args.output)

        if args.pdf_structured:
            return 0

        if not result['success']:
            return 1

        threshold = get_config("pipeline.strict_confidence_threshold", 85)
        if args.strict and result['confidence'] < threshold:
            logger.error(
                f"Confidence {result['confidence']} is below the strict threshold {threshold}"
            )
            return EXIT_LOW_CONFIDENCE

        return 0

    except ArticleOcrError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled by user", file=sys.stderr)
        return 130

    except Exception as e:
        print(f"Unexpected error: {e}", file=sys.stderr)
        if "--debug" in sys.argv:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
