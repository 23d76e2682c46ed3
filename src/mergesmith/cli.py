"""Command-line interface for MergeSmith."""

import argparse
import json
import logging
import sys
from pathlib import Path

import uvicorn

from .config import settings
from .merge import MergeEngine, ValidationError, export_documents
from .registry import PlaceholderRegistry


def main(argv: list[str] | None = None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="MergeSmith - Mail-merge engine for bracketed text templates"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Server command
    server_parser = subparsers.add_parser("serve", help="Start the web server")
    server_parser.add_argument(
        "--host", default=settings.host, help=f"Host to bind to (default: {settings.host})"
    )
    server_parser.add_argument(
        "--port", type=int, default=settings.port, help=f"Port to bind to (default: {settings.port})"
    )
    server_parser.add_argument(
        "--reload", action="store_true", help="Enable auto-reload for development"
    )

    # Merge command
    merge_parser = subparsers.add_parser(
        "merge", help="Generate documents and write them as one text blob"
    )
    merge_parser.add_argument("--template", "-t", required=True, help="Path to the template text file")
    merge_parser.add_argument(
        "--values", "-v", required=True, help='Path to a JSON file like {"Name": ["Ann", "Bob"]}'
    )
    merge_parser.add_argument("--output", "-o", help="Write the export here instead of stdout")
    merge_parser.add_argument(
        "--raw-names", action="store_true", help="Treat field names as regular expressions"
    )

    # Count command
    count_parser = subparsers.add_parser(
        "count", help="Print how many documents a values file would produce"
    )
    count_parser.add_argument("--values", "-v", required=True, help="Path to the JSON values file")

    args = parser.parse_args(argv)
    logging.basicConfig(level=settings.log_level)

    if args.command == "serve":
        run_server(args.host, args.port, args.reload)
    elif args.command == "merge":
        sys.exit(run_merge(args.template, args.values, args.output, args.raw_names))
    elif args.command == "count":
        sys.exit(run_count(args.values))
    else:
        parser.print_help()
        sys.exit(1)


def run_server(host: str, port: int, reload: bool):
    """Run the web server."""
    uvicorn.run(
        "mergesmith.api:create_app",
        host=host,
        port=port,
        reload=reload,
        factory=True,
    )


def load_registry(values_path: str) -> PlaceholderRegistry:
    """
    Build a registry from a JSON values file.

    The file holds an object mapping each field name to its list of values.
    Non-string values are converted with str().
    """
    data = json.loads(Path(values_path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("Values file must contain a JSON object of field name -> list of values")

    mapping = {}
    for name, values in data.items():
        if not isinstance(values, list):
            raise ValueError(f"Values for field '{name}' must be a list")
        mapping[name] = ["" if v is None else str(v) for v in values]
    return PlaceholderRegistry.from_mapping(mapping)


def run_merge(template_path: str, values_path: str, output_path: str | None, raw_names: bool) -> int:
    """Generate documents and print or save the export. Returns an exit code."""
    try:
        template = Path(template_path).read_text(encoding="utf-8")
        registry = load_registry(values_path)
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    engine = MergeEngine.from_settings()
    if raw_names:
        engine.escape_names = False

    try:
        documents = engine.generate(template, registry)
    except ValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    blob = export_documents(documents)
    if output_path:
        Path(output_path).write_text(blob, encoding="utf-8")
        print(f"Wrote {len(documents)} documents to {output_path}")
    else:
        sys.stdout.write(blob)
    return 0


def run_count(values_path: str) -> int:
    """Print the number of documents the values file would produce."""
    try:
        registry = load_registry(values_path)
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    print(MergeEngine.from_settings().preview_count(registry))
    return 0


if __name__ == "__main__":
    main()
