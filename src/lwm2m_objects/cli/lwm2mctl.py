#!/usr/bin/env python3
"""
lwm2mctl - LwM2M object definition compiler CLI

- Compile definitions into the inventory (lwm2mctl compile)
- List available definitions (lwm2mctl list)
- Show one parsed definition (lwm2mctl show 3303)
- Export the client object mapping (lwm2mctl export-objects)
- Serve the inventory over HTTP (lwm2mctl serve)
- Version info (lwm2mctl version)
"""

import argparse
import json
import logging
import sys
from typing import Optional

from pydantic import ValidationError

from lwm2m_objects import __version__
from lwm2m_objects.config import CompilerConfig, load_config
from lwm2m_objects.definitions.parser import get_object_info
from lwm2m_objects.definitions.scanner import list_available_object_ids
from lwm2m_objects.errors import CompilerError
from lwm2m_objects.inventory.client_objects import write_client_objects
from lwm2m_objects.inventory.service import CompilerService
from lwm2m_objects.inventory.store import InventoryStore


class Colors:
    """ANSI color codes for terminal output."""

    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    RED = "\033[91m"
    RESET = "\033[0m"
    BOLD = "\033[1m"


def colorize(text: str, color: str) -> str:
    """Colorize text if stdout is a TTY."""
    if sys.stdout.isatty():
        return f"{color}{text}{Colors.RESET}"
    return text


def setup_logging(level: str, quiet: bool = False) -> None:
    logging.basicConfig(
        level="WARNING" if quiet else level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def build_config(args) -> CompilerConfig:
    """Merge the YAML config file, environment and CLI options."""
    return load_config(
        getattr(args, "config", None),
        definitions_dir=getattr(args, "definitions_dir", None),
        inventory_path=getattr(args, "inventory", None),
        mirror_path=getattr(args, "mirror", None),
        catalog_path=getattr(args, "catalog", None),
        client_objects_path=getattr(args, "client_objects", None),
        write_catalog=False if getattr(args, "no_catalog", False) else None,
        include_execute_resources=True if getattr(args, "include_execute", False) else None,
        log_level=getattr(args, "log_level", None),
    )


def cmd_compile(args, config: CompilerConfig) -> int:
    """
    Compile definitions into the inventory and catalog.

    Returns:
        Exit code (0 on success, 1 on a persistence failure)
    """
    try:
        report = CompilerService(config).compile()
    except CompilerError as e:
        print(colorize(f"✗ Compilation failed: {e}", Colors.RED), file=sys.stderr)
        return 1

    if report.files_found == 0:
        print(colorize(f"No LwM2M definition files found in {config.definitions_dir}", Colors.YELLOW))
        return 0

    print(colorize(f"✓ Compiled {len(report.objects)} objects from {report.files_found} files", Colors.GREEN))
    for path in report.inventory_paths:
        print(f"  inventory: {path}")
    if report.catalog_path:
        print(f"  catalog:   {report.catalog_path}")
    if report.client_objects_path:
        print(f"  objects:   {report.client_objects_path}")
    if report.skipped:
        print(colorize(f"  skipped {len(report.skipped)} files:", Colors.YELLOW))
        for path in report.skipped:
            print(f"    {path}")
    return 0


def cmd_list(args, config: CompilerConfig) -> int:
    """List object IDs with a definition file."""
    object_ids = list_available_object_ids(config.definitions_dir)
    for object_id in object_ids:
        print(object_id)
    return 0


def cmd_show(args, config: CompilerConfig) -> int:
    """Print one parsed definition as JSON."""
    obj = get_object_info(
        config.definitions_dir,
        args.object_id,
        include_execute=config.include_execute_resources,
    )
    if obj is None:
        print(colorize(f"✗ Object {args.object_id} not found", Colors.RED), file=sys.stderr)
        return 1

    print(json.dumps(obj.to_inventory_entry(), indent=2, ensure_ascii=False))
    return 0


def cmd_export_objects(args, config: CompilerConfig) -> int:
    """Write the client object mapping from an existing inventory."""
    store = InventoryStore(config.resolved_inventory_path)
    try:
        inventory = store.load()
        if not inventory:
            print(colorize(f"✗ No inventory at {store.primary_path}; run compile first", Colors.RED), file=sys.stderr)
            return 1
        path = write_client_objects(inventory, args.output)
    except CompilerError as e:
        print(colorize(f"✗ Export failed: {e}", Colors.RED), file=sys.stderr)
        return 1

    print(colorize(f"✓ Wrote {path}", Colors.GREEN))
    return 0


def cmd_serve(args, config: CompilerConfig) -> int:
    """Serve the inventory over HTTP."""
    from lwm2m_objects.ui.http_server import main as serve

    updates = {}
    if args.host:
        updates["api_host"] = args.host
    if args.port:
        updates["api_port"] = args.port
    serve(config.model_copy(update=updates))
    return 0


def cmd_version(args, config: Optional[CompilerConfig] = None) -> int:
    """
    Print version information.

    Returns:
        Exit code (always 0)
    """
    print(f"lwm2mctl version {__version__}")
    print("LwM2M object definition compiler")
    return 0


def add_path_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", help="YAML configuration file")
    parser.add_argument(
        "-d", "--definitions-dir",
        help="Directory with lwm2m-object-<id>.xml files (default: .)",
    )
    parser.add_argument("--inventory", help="Primary inventory file")


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for lwm2mctl."""
    parser = argparse.ArgumentParser(
        description="LwM2M object definition compiler",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  lwm2mctl compile -d config                  # Compile config/lwm2m-object-*.xml
  lwm2mctl list -d config                     # List available object IDs
  lwm2mctl show 3303 -d config                # Show one parsed object
  lwm2mctl export-objects -o mapping.json     # Export client object mapping
  lwm2mctl serve                              # Serve the inventory over HTTP

Environment variables:
  LWM2M_DEFINITIONS_DIR, LWM2M_INVENTORY_PATH, LWM2M_MIRROR_PATH,
  LWM2M_CATALOG_PATH, LWM2M_INCLUDE_EXECUTE_RESOURCES, LWM2M_LOG_LEVEL
        """
    )
    parser.add_argument("--log-level", help="Logging level (default: INFO)")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only log warnings and errors")

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # compile command
    compile_parser = subparsers.add_parser(
        "compile",
        help="Compile definitions into the inventory and catalog"
    )
    add_path_options(compile_parser)
    compile_parser.add_argument("--mirror", help="Public inventory mirror file")
    compile_parser.add_argument("--catalog", help="Catalog report file")
    compile_parser.add_argument("--no-catalog", action="store_true", help="Do not write the catalog")
    compile_parser.add_argument(
        "--include-execute",
        action="store_true",
        help="Keep execute-only resources as FUNCTION markers"
    )
    compile_parser.add_argument(
        "--client-objects",
        help="Also export the client object mapping to this file"
    )

    # list command
    list_parser = subparsers.add_parser("list", help="List available object definitions")
    add_path_options(list_parser)

    # show command
    show_parser = subparsers.add_parser("show", help="Show one parsed object definition")
    show_parser.add_argument("object_id", help="Object ID, e.g. 3303")
    add_path_options(show_parser)
    show_parser.add_argument(
        "--include-execute",
        action="store_true",
        help="Include execute-only resources"
    )

    # export-objects command
    export_parser = subparsers.add_parser(
        "export-objects",
        help="Export the client object mapping from the inventory"
    )
    add_path_options(export_parser)
    export_parser.add_argument(
        "-o", "--output",
        default="mapping.json",
        help="Output file (default: mapping.json)"
    )

    # serve command
    serve_parser = subparsers.add_parser("serve", help="Serve the inventory over HTTP")
    add_path_options(serve_parser)
    serve_parser.add_argument("--host", help="Bind host (default: 0.0.0.0)")
    serve_parser.add_argument("--port", type=int, help="Port (default: 8000)")

    # version command
    subparsers.add_parser("version", help="Show version information")

    return parser


COMMANDS = {
    "compile": cmd_compile,
    "list": cmd_list,
    "show": cmd_show,
    "export-objects": cmd_export_objects,
    "serve": cmd_serve,
}


def main(argv=None):
    """Main entry point for lwm2mctl CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    if args.command == "version":
        return cmd_version(args)

    try:
        config = build_config(args)
    except (OSError, ValueError, ValidationError) as e:
        print(colorize(f"✗ Invalid configuration: {e}", Colors.RED), file=sys.stderr)
        return 1

    setup_logging(config.log_level, quiet=args.quiet)

    handler = COMMANDS.get(args.command)
    if handler is None:
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 1
    return handler(args, config)


if __name__ == "__main__":
    sys.exit(main())
