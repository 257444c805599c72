"""
bootstrap/entrypoints.py - Command line entry point

Inspects and evaluates property sets from the command line:

    propgraph order  mypkg.props:vessel
    propgraph graph  mypkg.props:vessel
    propgraph eval   mypkg.props:vessel --input '{"loa": 24.0}' --trace

The target is "module:attribute" naming a PropertySet or a Schema.
"""

from __future__ import annotations
from importlib import import_module
from typing import Any, List, Optional
import argparse
import json
import logging
import sys

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ENGINE_ERROR = 1
EXIT_USAGE_ERROR = 2


def setup_logging(level: str = "INFO", log_file: Optional[str] = None, json_format: bool = False) -> None:
    """
    Configure application logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional log file path
        json_format: Use JSON format for logs
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    if json_format:
        class JSONFormatter(logging.Formatter):
            def format(self, record):
                return json.dumps({
                    "timestamp": self.formatTime(record),
                    "level": record.levelname,
                    "logger": record.name,
                    "message": record.getMessage(),
                })

        formatter: logging.Formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )

    # Console handler; stdout carries command output
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        file_handler.setLevel(log_level)
        root_logger.addHandler(file_handler)


def load_target(target: str):
    """
    Resolve "module:attribute" to a Schema.

    Raises:
        ValueError: malformed target
        ImportError / AttributeError: target cannot be found
        TypeError: target is neither a PropertySet nor a Schema
    """
    from propgraph.engine import Schema
    from propgraph.surface import PropertySet

    module_name, sep, attr_path = target.partition(":")
    if not sep or not module_name or not attr_path:
        raise ValueError(f"Target must look like 'module:attribute', got '{target}'")

    obj: Any = import_module(module_name)
    for attr in attr_path.split("."):
        obj = getattr(obj, attr)

    if isinstance(obj, PropertySet):
        return obj.build()
    if isinstance(obj, Schema):
        return obj
    raise TypeError(f"'{target}' is a {type(obj).__name__}, expected PropertySet or Schema")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Inspect and evaluate property sets",
        prog="propgraph",
    )
    parser.add_argument(
        "-c", "--config",
        help="Path to configuration file",
        default=None,
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Log level (overrides configuration)",
    )
    parser.add_argument(
        "--log-file",
        help="Log file path",
        default=None,
    )

    commands = parser.add_subparsers(dest="command", required=True)

    order = commands.add_parser("order", help="Print the evaluation order")
    order.add_argument("target", help="module:attribute of a PropertySet or Schema")

    graph = commands.add_parser("graph", help="Print the schema and its dependency graph as JSON")
    graph.add_argument("target", help="module:attribute of a PropertySet or Schema")

    run = commands.add_parser("eval", help="Evaluate one input and print the record as JSON")
    run.add_argument("target", help="module:attribute of a PropertySet or Schema")
    run.add_argument("-i", "--input", required=True, help="Input value as JSON")
    run.add_argument("--trace", action="store_true", help="Include the clause chosen per property")

    return parser


def cli_main(args: Optional[List[str]] = None) -> int:
    """
    CLI entry point.

    Args:
        args: Command line arguments (defaults to sys.argv)

    Returns:
        Exit code
    """
    from propgraph.bootstrap.config import load_config
    from propgraph.engine import Evaluator
    from propgraph.errors import PropertyGraphError

    parsed = _build_parser().parse_args(args)

    config = load_config(parsed.config)
    log_level = "DEBUG" if parsed.verbose else (parsed.log_level or config.logging.level)
    setup_logging(
        level=log_level,
        log_file=parsed.log_file or config.logging.log_file,
        json_format=config.logging.json_logs,
    )

    try:
        schema = load_target(parsed.target)
    except PropertyGraphError as e:
        print(json.dumps(e.to_dict(), indent=2), file=sys.stderr)
        return EXIT_ENGINE_ERROR
    except (ValueError, ImportError, AttributeError, TypeError) as e:
        logger.error(f"Cannot load target '{parsed.target}': {e}")
        return EXIT_USAGE_ERROR

    if parsed.command == "order":
        for name in schema.evaluation_order:
            print(name)
        return EXIT_OK

    if parsed.command == "graph":
        print(json.dumps(schema.to_dict(), indent=2, default=str))
        return EXIT_OK

    try:
        value = json.loads(parsed.input)
    except json.JSONDecodeError as e:
        logger.error(f"Input is not valid JSON: {e}")
        return EXIT_USAGE_ERROR

    evaluator = Evaluator(schema, config.engine)
    try:
        if parsed.trace:
            result = evaluator.evaluate_traced(value)
            output = {"record": result.record.to_dict(), "trace": result.get_summary()}
        else:
            output = evaluator.evaluate(value).to_dict()
    except PropertyGraphError as e:
        print(json.dumps(e.to_dict(), indent=2, default=str), file=sys.stderr)
        return EXIT_ENGINE_ERROR

    print(json.dumps(output, indent=2, default=str))
    return EXIT_OK
