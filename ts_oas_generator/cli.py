#!/usr/bin/env python3
"""Command-line interface for the TypeScript OAS Generator."""

import argparse
import contextlib
import logging
import shutil
import sys
import tempfile
import traceback
from collections.abc import Generator
from pathlib import Path

from ts_oas_generator.config import DateType, DefaultResponseSuccess, GenerationPolicy, OperationGrouping
from ts_oas_generator.errors import ConfigurationError, DocumentLoadError, GenerationError
from ts_oas_generator.generator.template_engine import AngularClientGenerator, GenerationResult
from ts_oas_generator.parser.oas_parser import OASParser
from ts_oas_generator.utils.file_utils import backup_file, restore_file, write_files_to_disk

logger = logging.getLogger(__name__)

# Exit codes for better error reporting
EXIT_SUCCESS = 0
EXIT_FILE_NOT_FOUND = 1
EXIT_INVALID_DOCUMENT = 2
EXIT_GENERATION_ERROR = 3


def parse_command_line_args(args: list[str] | None = None) -> argparse.Namespace:
    """Create and configure the command line argument parser."""
    parser = argparse.ArgumentParser(
        description="Generate an Angular TypeScript client from a Swagger 2.0 or OpenAPI 3 specification",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s swagger.json
  %(prog)s openapi.yaml --output ./src/app/api-client.ts --rxjs-version 7.8
  %(prog)s swagger.json --config generator.toml --no-dto-types --verbose
        """,
    )
    parser.add_argument(
        "spec_file",
        type=Path,
        help="Path to OpenAPI specification file (JSON or YAML)",
        metavar="SPEC_FILE",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=Path("./api-client.ts"),
        help="Output file for the generated client (default: %(default)s)",
        dest="output_file",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        help="TOML file with a [generator] table of policy options (optional)",
        dest="config_file",
    )
    parser.add_argument(
        "--typescript-version",
        type=float,
        help="Target TypeScript version (default: 2.7)",
    )
    parser.add_argument(
        "--rxjs-version",
        type=float,
        help="Target RxJS version (default: 6.0)",
    )
    parser.add_argument(
        "--export-types",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Export every top-level declaration (default: on)",
    )
    parser.add_argument(
        "--client-interfaces",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Generate an interface per client class (default: off)",
        dest="generate_client_interfaces",
    )
    parser.add_argument(
        "--dto-types",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Generate DTO classes instead of plain interfaces (default: on)",
        dest="generate_dto_types",
    )
    parser.add_argument(
        "--date-type",
        choices=[member.value for member in DateType],
        help="TypeScript type used for date and date-time values (default: Date)",
    )
    parser.add_argument(
        "--default-response",
        choices=[member.value for member in DefaultResponseSuccess],
        help="When a 'default' response counts as success (default: when-no-success)",
        dest="default_response_success",
    )
    parser.add_argument(
        "--operation-grouping",
        choices=[member.value for member in OperationGrouping],
        help="How operations are grouped into client classes (default: operation-id)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output",
    )

    return parser.parse_args(args)


def configure_logging(*, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def load_policy(parsed_args: argparse.Namespace) -> GenerationPolicy:
    """Policy from the optional config file, overridden by explicit flags."""
    policy = GenerationPolicy.from_file(parsed_args.config_file) if parsed_args.config_file else GenerationPolicy()
    return policy.merge_with_args(parsed_args)


def print_verbose_info(*, operation_count: int, schema_count: int) -> None:
    """Print verbose information about parsed specification."""
    print(f"Parsed {operation_count} operations")
    print(f"Found {schema_count} schemas")


def print_warnings(warnings: list[str]) -> None:
    for warning in warnings:
        print(f"Warning: {warning}", file=sys.stderr)


@contextlib.contextmanager
def backup_output_file(output_file: Path) -> Generator[None, None, None]:
    """A context manager that restores the previous output file if generation fails."""
    backup_dir = Path(tempfile.mkdtemp())
    backup = backup_file(output_file, backup_dir)

    try:
        yield
    except Exception:
        if backup is not None:
            print("Error: Generation failed. Restoring original content.", file=sys.stderr)
            restore_file(backup, output_file)
        elif output_file.exists():
            output_file.unlink()
        raise
    finally:
        shutil.rmtree(backup_dir)


def generate_client_from_spec(
    *,
    spec_file: Path,
    policy: GenerationPolicy,
    verbose: bool,
) -> GenerationResult:
    """Generate the Angular client source from an OpenAPI specification file."""
    parser = OASParser()
    document = parser.parse_file(spec_file)

    if verbose:
        print_verbose_info(
            operation_count=len(document.operations),
            schema_count=len(document.registry.schemas()),
        )

    generator = AngularClientGenerator(policy)
    return generator.generate(document)


def main(args: list[str] | None = None) -> int:
    """Generate an Angular TypeScript client from an OpenAPI specification."""
    parsed_args = parse_command_line_args(args)
    configure_logging(verbose=parsed_args.verbose)

    if not parsed_args.spec_file.is_file():
        print(f"Error: Specification file not found: {parsed_args.spec_file}", file=sys.stderr)
        return EXIT_FILE_NOT_FOUND

    try:
        policy = load_policy(parsed_args)
        with backup_output_file(parsed_args.output_file):
            result = generate_client_from_spec(
                spec_file=parsed_args.spec_file,
                policy=policy,
                verbose=parsed_args.verbose,
            )
            write_files_to_disk({parsed_args.output_file: result.code})

        print_warnings(result.warnings)
        print(f"TypeScript client generated successfully in {parsed_args.output_file}")
        return EXIT_SUCCESS

    except DocumentLoadError as e:
        print(f"Error: Invalid specification document: {e}", file=sys.stderr)
        return EXIT_INVALID_DOCUMENT
    except ConfigurationError as e:
        print(f"Error: Invalid configuration: {e}", file=sys.stderr)
        return EXIT_GENERATION_ERROR
    except GenerationError as e:
        print(f"Error: {e}", file=sys.stderr)
        if parsed_args.verbose:
            traceback.print_exc()
        return EXIT_GENERATION_ERROR
    except Exception as e:
        logger.debug("Unexpected failure", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        if parsed_args.verbose:
            traceback.print_exc()
        return EXIT_GENERATION_ERROR


if __name__ == "__main__":
    sys.exit(main())
