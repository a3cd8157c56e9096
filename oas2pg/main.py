#!/usr/bin/env python
# ============================================================================
# OAS2PG COMMAND LINE
# ============================================================================
# STATUS: Entry point - CLI
# PURPOSE: Generate PostgreSQL DDL (and query templates) from an OpenAPI spec
# USAGE:
#   oas2pg petstore.yaml                         # Print DDL to stdout
#   oas2pg petstore.yaml --output-folder out/    # Write out/schemas.sql
#   oas2pg petstore.yaml --queries -o out/       # Also write out/queries.sql
# ============================================================================

import argparse
import os
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from oas2pg.__version__ import __version__
from oas2pg.core.config import get_defaults
from oas2pg.core.contracts import EnumMode, ErrorPolicy
from oas2pg.core.exceptions import SchemaGenerationError
from oas2pg.core.logging import ComponentType, configure_logging, get_logger
from oas2pg.infrastructure import OpenAPILoader
from oas2pg.services import DDLService, QueryService

logger = get_logger(__name__, ComponentType.CLI)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="oas2pg",
        description="Generate PostgreSQL DDL from an OpenAPI 3.x document",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  oas2pg petstore.yaml                          # Print DDL to stdout
  oas2pg petstore.yaml --delete-statements      # Prefix DROP statements
  oas2pg petstore.yaml -o out/ --queries        # Write schemas.sql and queries.sql

Environment Variables:
  OAS2PG_ENUM_MODE          type (CREATE TYPE) or check (IN clause)
  OAS2PG_ERROR_POLICY       abort or skip
  OAS2PG_DELETE_STATEMENTS  Prefix DROP statements (true/false)
  OAS2PG_VALIDATE           Validate generated SQL (default: true)
  OAS2PG_OUTPUT_FOLDER      Output folder (default: stdout)
  LOG_LEVEL                 Log level (default: INFO)
  LOG_FORMAT                json for structured logs
        """
    )
    parser.add_argument(
        "spec",
        help="Path to the OpenAPI YAML/JSON document"
    )
    parser.add_argument(
        "--delete-statements",
        action="store_true",
        help="Emit DROP TABLE/TYPE statements before the CREATE statements"
    )
    parser.add_argument(
        "--output-folder", "-o",
        type=str,
        help="Write schemas.sql (and queries.sql) here instead of stdout"
    )
    parser.add_argument(
        "--queries",
        action="store_true",
        help="Also generate query templates from paths"
    )
    parser.add_argument(
        "--no-validate",
        action="store_true",
        help="Skip SQL validation of the generated script"
    )
    parser.add_argument(
        "--skip-invalid",
        action="store_true",
        help="Skip entities that fail instead of aborting"
    )
    parser.add_argument(
        "--enum-mode",
        choices=[m.value for m in EnumMode],
        help="Render enums as dedicated types or CHECK ... IN clauses"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )
    return parser


def _write(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text + "\n" if text else "", encoding="utf-8")
    logger.info(f"Wrote {path}")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    configure_logging(
        level="DEBUG" if args.verbose else os.getenv("LOG_LEVEL", "INFO"),
    )

    defaults = get_defaults()
    generator = defaults.generator
    if args.delete_statements:
        generator = replace(generator, delete_statements=True)
    if args.skip_invalid:
        generator = replace(generator, error_policy=ErrorPolicy.SKIP)
    if args.enum_mode:
        generator = replace(generator, enum_mode=EnumMode(args.enum_mode))

    validator = defaults.validator
    if args.no_validate:
        validator = replace(validator, enabled=False)

    output_folder = args.output_folder or defaults.output.output_folder

    try:
        document = OpenAPILoader().load_file(args.spec)
        result = DDLService(generator=generator, validator=validator).generate(document)
        queries = QueryService().generate(document) if args.queries else None
    except SchemaGenerationError as e:
        logger.error(f"Generation failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for entity, reason in result.skipped:
        if reason in result.errors:
            print(f"Skipped {entity}: {reason}", file=sys.stderr)

    if output_folder:
        folder = Path(output_folder)
        _write(folder / defaults.output.schema_filename, result.sql)
        if queries is not None:
            _write(folder / defaults.output.queries_filename, queries)
    else:
        print(result.sql)
        if queries:
            print()
            print(queries)

    return 0


if __name__ == "__main__":
    sys.exit(main())
