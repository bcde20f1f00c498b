#!/usr/bin/env python3
"""
Classi CLI

Command-line interface for scoring classification results against the
encrypted reference answer.
"""
import argparse
import json
import logging
import sys
from zipfile import BadZipFile

from openpyxl.utils.exceptions import InvalidFileException

from config import settings
from core import ClassificationError

logger = logging.getLogger(__name__)


def score_file(candidate_path: str, reference_path: str = None, json_path: str = None):
    """Score a candidate workbook and print the accuracy report."""
    from services.scoring import score_files, format_report

    result = score_files(candidate_path, reference_path)

    for line in format_report(result.report):
        print(line)

    if json_path:
        with open(json_path, 'w', encoding='utf-8') as f:
            json.dump(result.to_dict(), f, ensure_ascii=False, indent=2)
        print(f"\nDiff written to {json_path}")


def encrypt_reference(source_path: str, output_path: str = None):
    """Encrypt a reference answer workbook for distribution."""
    from services.codec import encrypt_file

    output_path = output_path or settings.REFERENCE_FILE
    written = encrypt_file(source_path, output_path)
    print(f"Encrypted {source_path} -> {output_path} ({written} bytes)")


def show_tree(file_path: str, encrypted: bool = False):
    """Print the classification tree of a workbook."""
    from services.scoring import load_tree, load_reference_tree

    tree = load_reference_tree(file_path) if encrypted else load_tree(file_path)
    print(tree.render())
    print(f"\n{tree.leaf_count()} field(s) under {len(tree.categories())} top-level category(ies)")


def run_server(host: str = "0.0.0.0", port: int = 8000, reload: bool = False):
    """Run the FastAPI server."""
    import uvicorn
    uvicorn.run(
        "api.main:app",
        host=host,
        port=port,
        reload=reload
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Classification result scoring",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {settings.APP_VERSION}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable info logging")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # score
    score_parser = subparsers.add_parser("score", help="Score a classification result file")
    score_parser.add_argument("candidate", help="Classification result workbook (.xlsx)")
    score_parser.add_argument("--reference", help=f"Encrypted reference file (default: {settings.REFERENCE_FILE})")
    score_parser.add_argument("--json", dest="json_path", help="Also write the full diff as JSON")

    # encrypt
    encrypt_parser = subparsers.add_parser("encrypt", help="Encrypt a reference answer workbook")
    encrypt_parser.add_argument("source", help="Reference answer workbook (.xlsx)")
    encrypt_parser.add_argument("--output", help=f"Output path (default: {settings.REFERENCE_FILE})")

    # show-tree
    tree_parser = subparsers.add_parser("show-tree", help="Print the classification tree of a file")
    tree_parser.add_argument("file", help="Workbook to read")
    tree_parser.add_argument("--encrypted", action="store_true", help="File is an encrypted reference")

    # serve
    serve_parser = subparsers.add_parser("serve", help="Run the scoring API server")
    serve_parser.add_argument("--host", default="0.0.0.0", help="Host to bind to")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on")
    serve_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else settings.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    if not args.command:
        parser.print_help()
        return 0

    try:
        if args.command == "score":
            score_file(args.candidate, args.reference, args.json_path)
        elif args.command == "encrypt":
            encrypt_reference(args.source, args.output)
        elif args.command == "show-tree":
            show_tree(args.file, args.encrypted)
        elif args.command == "serve":
            run_server(args.host, args.port, args.reload)
    except (ClassificationError, OSError, BadZipFile, InvalidFileException) as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
