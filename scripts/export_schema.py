#!/usr/bin/env python
# ============================================================================
# SCHEMA EXPORT SCRIPT
# ============================================================================
# PURPOSE: Print the MySQL script for a set of annotated models
# USAGE:
#   python scripts/export_schema.py myapp.models:Author myapp.models:Book
#   python scripts/export_schema.py --tolerant --annotate myapp.models:Author
#   python scripts/export_schema.py --drop myapp.models:Author myapp.models:Book
# ============================================================================

import sys
import os
import argparse
import importlib

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from tablewright import Database, RenderMode, SchemaDefaults, get_defaults
from tablewright.errors import SchemaError
from tablewright.logging import configure_logging


def load_target(target: str):
    """Resolve "package.module:ClassName" to the class object."""
    module_name, sep, attribute = target.partition(":")
    if not sep or not module_name or not attribute:
        raise argparse.ArgumentTypeError(
            f"Expected module:Class, got {target!r}"
        )
    module = importlib.import_module(module_name)
    try:
        return getattr(module, attribute)
    except AttributeError:
        raise argparse.ArgumentTypeError(f"{module_name} has no attribute {attribute!r}")


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Print the MySQL schema script for annotated models",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/export_schema.py app.models:Author app.models:Book
  python scripts/export_schema.py --tolerant --no-records app.models:Author
  python scripts/export_schema.py --drop app.models:Author app.models:Book

Environment Variables:
  TABLEWRIGHT_NAMING_STRATEGY     Default naming strategy (default: underscore_separated_lower_case)
  TABLEWRIGHT_DEFER_FOREIGN_KEYS  Emit foreign keys as ALTER TABLE (default: false)
  TABLEWRIGHT_RENDER_MODE         strict or tolerant (default: tolerant)
  TABLEWRIGHT_INSERT_RECORDS      Include seed records (default: true)
  LOG_FORMAT                      "json" for structured log output
        """
    )
    parser.add_argument(
        "targets",
        nargs="+",
        help="Model classes as module:Class, in registration order"
    )
    parser.add_argument(
        "--tolerant",
        action="store_true",
        help="Render IF NOT EXISTS / DROP TRIGGER IF EXISTS / INSERT IGNORE"
    )
    parser.add_argument(
        "--no-records",
        action="store_true",
        help="Omit seed INSERT statements"
    )
    parser.add_argument(
        "--defer-foreign-keys",
        action="store_true",
        help="Add foreign keys with ALTER TABLE after all tables exist"
    )
    parser.add_argument(
        "--annotate",
        action="store_true",
        help="Prefix the script with a banner and section headers"
    )
    parser.add_argument(
        "--drop",
        action="store_true",
        help="Print DROP TABLE statements instead of the create script"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging"
    )
    args = parser.parse_args(argv)

    # Logs go to stderr, the script to stdout
    configure_logging(level="DEBUG" if args.verbose else "WARNING")

    try:
        targets = [load_target(t) for t in args.targets]
    except (ImportError, argparse.ArgumentTypeError) as e:
        parser.error(str(e))

    env = get_defaults()
    defaults = SchemaDefaults(
        naming_strategy=env.naming_strategy,
        defer_foreign_keys=args.defer_foreign_keys or env.defer_foreign_keys,
        render_mode=RenderMode.TOLERANT if args.tolerant else RenderMode.STRICT,
        insert_records=not args.no_records and env.insert_records,
    )

    database = Database(defaults=defaults)
    try:
        database.add_tables(*targets)
        if args.drop:
            output = database.exporter().export_drop_schema()
        else:
            output = database.export_schema(pure=not args.annotate)
    except SchemaError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    sys.stdout.write(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
