# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
jinjabridge - command line entry point.

Renders templates against the static reference services, and lists the
template functions and filters the bridge extension registers.
"""

import argparse
import logging
import os
import sys
from typing import Any, Optional

import yaml
from jinja2 import FileSystemLoader, TemplateError
from prettytable import PrettyTable

from jinjabridge import __version__
from jinjabridge.config import load_config
from jinjabridge.extension import ServiceBridgeExtension, TemplateCallable, create_environment
from jinjabridge.reference import build_static_services
from jinjabridge.utils import parse_cli_params

logger = logging.getLogger(__name__)


def configure_parser(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="cmd", required=True)

    p_render = subparsers.add_parser("render", help="Render a template with the static reference services")
    p_render.add_argument("template", help="Template file to render")
    p_render.add_argument("--config", help="Path to a bridge config YAML file")
    p_render.add_argument("--context", help="Path to a YAML file with template variables")
    p_render.add_argument(
        "--set",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Inline config override using dotted keys (e.g., theme.name=olivero)",
    )
    p_render.add_argument("--output", help="File to write the rendered output to")

    subparsers.add_parser("callables", help="List registered template functions and filters")


def _load_context(path: Optional[str]) -> dict[str, Any]:
    if not path:
        return {}
    with open(path, encoding="utf-8") as fh:
        context = yaml.safe_load(fh) or {}
    if not isinstance(context, dict):
        raise ValueError(f"Context file {path} must contain a mapping, got {type(context).__name__}")
    return context


def _format_safety(entry: TemplateCallable) -> str:
    if entry.is_safe:
        return ", ".join(entry.is_safe)
    if entry.is_safe_callback is not None:
        return "compile time"
    return "-"


def build_callables_table(extension: ServiceBridgeExtension) -> PrettyTable:
    table = PrettyTable()
    table.field_names = ["Name", "Kind", "Safe for", "Needs environment"]
    table.align["Name"] = "l"
    for kind, entries in (("function", extension.get_functions()), ("filter", extension.get_filters())):
        for entry in entries:
            table.add_row([entry.name, kind, _format_safety(entry), "yes" if entry.needs_environment else ""])
    return table


def render_template(args: argparse.Namespace) -> str:
    overrides = parse_cli_params(args.set or [])
    config = load_config(args.config, overrides=overrides)
    template_path = os.path.abspath(args.template)
    if not os.path.exists(template_path):
        raise FileNotFoundError(f"Template not found: {template_path}")

    search_path = config.templates_dir or os.path.dirname(template_path)
    services = build_static_services(config)
    env = create_environment(services, config, loader=FileSystemLoader(search_path))
    name = os.path.relpath(template_path, search_path).replace(os.sep, "/")
    rendered = env.get_template(name).render(**_load_context(args.context))

    libraries = services.library_attacher.libraries
    if libraries:
        logger.info("Attached libraries: %s", ", ".join(libraries))
    return rendered


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(
        prog="jinjabridge",
        description="Render templates through the framework bridge extension",
    )
    configure_parser(parser)
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.cmd == "callables":
        env = create_environment(None)
        print(build_callables_table(env.extensions[ServiceBridgeExtension.identifier]))
        return

    try:
        rendered = render_template(args)
    except (FileNotFoundError, ValueError, LookupError, TypeError, TemplateError):
        logger.exception("Failed to render %s", args.template)
        sys.exit(2)

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(rendered)
        logger.info("Wrote %s", args.output)
    else:
        print(rendered)


if __name__ == "__main__":
    main()
