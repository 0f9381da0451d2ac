# Copyright 2026 OptSpec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the optspec command-line interface."""

import argparse
import json
import logging
import sys
from pathlib import Path

from yachalk import chalk

from optspec.compiler.artifact import write_artifact
from optspec.compiler.build import BuildError, compile_file
from optspec.compiler.lexer import lex
from optspec.errors import CompilerError, UserError
from optspec.model.doc import Doc
from optspec.model.grammar import Grammar
from optspec.program import OptSpec
from optspec.render import render_help, render_option
from optspec.settings.config import CONFIG_FILE_NAME, ConfigError, OptSpecConfig, find_config, load_config
from optspec.validation.checks import validate

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the optspec CLI."""
    parser = argparse.ArgumentParser(
        prog="optspec",
        description="optspec - usage string compiler",
    )
    parser.add_argument("--config", help=f"Configuration file (default: ./{CONFIG_FILE_NAME} if present)")
    parser.add_argument("--verbose", action="store_true", help="Write debug log messages")
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # init subcommand
    init_parser = subparsers.add_parser(
        "init",
        help="Create a configuration file",
        description=f"Create a {CONFIG_FILE_NAME} file with default settings.",
    )
    init_parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Directory to create the configuration in (default: current directory)",
    )

    # subcommands operating on a usage file
    descriptions = {
        "check": "Compile a usage file and report problems",
        "tokens": "Print the tokens of a usage file",
        "grammar": "Print the command and option tree of a usage file",
        "help": "Print the help text generated from a usage file",
        "compile": "Compile a usage file into a JSON artifact",
    }
    spec_parsers = {}
    for name, description in descriptions.items():
        spec_parsers[name] = subparsers.add_parser(name, help=description, description=f"{description}.")
        spec_parsers[name].add_argument("spec", help="Path to the usage file")
    spec_parsers["compile"].add_argument(
        "-o",
        "--output",
        help="Artifact path (default: the configured build directory)",
    )

    # parse subcommand
    parse_parser = subparsers.add_parser(
        "parse",
        help="Interpret a command line against a usage file",
        description="Interpret ARGS against a usage file and print the result as JSON.",
    )
    parse_parser.add_argument("spec", help="Path to the usage file")
    parse_parser.add_argument("args", nargs=argparse.REMAINDER, help="Command line to interpret")

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    sys.exit(_dispatch(args))


# ################
# Implementation
# ################

_CONFIG_TEMPLATE = """\
# optspec configuration
# program-name: myprog
float: true
build-directory: .optspec-build
builtin-options:
  help: true
"""


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    if args.command == "init":
        return _cmd_init(args)
    try:
        config = _load_config(args)
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    handlers = {
        "check": _cmd_check,
        "tokens": _cmd_tokens,
        "grammar": _cmd_grammar,
        "help": _cmd_help,
        "compile": _cmd_compile,
        "parse": _cmd_parse,
    }
    return handlers[args.command](args, config)


def _load_config(args: argparse.Namespace) -> OptSpecConfig:
    if args.config is not None:
        return load_config(Path(args.config))
    return find_config(Path.cwd())


def _program_name(spec: Path, config: OptSpecConfig) -> str:
    return config.program_name or spec.stem


def _compile(
    args: argparse.Namespace,
    config: OptSpecConfig,
    build_dir: Path | None = None,
) -> tuple[Grammar, Doc] | None:
    """Compile the usage file named on the command line, reporting errors."""
    spec = Path(args.spec)
    try:
        return compile_file(spec, build_dir, _program_name(spec, config))
    except BuildError as exc:
        print(f"Error: {exc}", file=sys.stderr)
    except CompilerError as exc:
        print(f"{spec}:{exc.location}: {exc.message}", file=sys.stderr)
    return None


def _cmd_init(args: argparse.Namespace) -> int:
    """Handle the init subcommand."""
    directory = Path(args.directory).resolve()

    if not directory.exists():
        print(f"Error: directory '{directory}' does not exist.", file=sys.stderr)
        return 1

    config_file = directory / CONFIG_FILE_NAME
    if config_file.exists():
        print(f"Error: configuration already exists at '{config_file}'.", file=sys.stderr)
        return 1

    config_file.write_text(_CONFIG_TEMPLATE, encoding="utf-8")
    print(f"Created configuration at '{config_file}'.")
    return 0


def _cmd_check(args: argparse.Namespace, config: OptSpecConfig) -> int:
    """Handle the check subcommand."""
    compiled = _compile(args, config)
    if compiled is None:
        return 1

    result = validate(compiled[0])
    for warning in result.warnings:
        print(chalk.yellow(f"Warning: {warning.message}"))
    for error in result.errors:
        print(chalk.red(f"Error: {error.message}"), file=sys.stderr)
    if result.has_errors:
        return 1
    if not result.warnings:
        print(chalk.green("No issues found."))
    return 0


def _cmd_tokens(args: argparse.Namespace, config: OptSpecConfig) -> int:
    """Handle the tokens subcommand."""
    spec = Path(args.spec)
    try:
        source = spec.read_text(encoding="utf-8")
    except OSError as exc:
        print(f"Error: Cannot read usage file '{spec}': {exc}", file=sys.stderr)
        return 1
    try:
        tokens = lex(_program_name(spec, config), source)
    except CompilerError as exc:
        print(f"{spec}:{exc.location}: {exc.message}", file=sys.stderr)
        return 1
    for token in tokens:
        print(f"{token.location:<8} {token.kind.value:<10} {token.value}")
    return 0


def _cmd_grammar(args: argparse.Namespace, config: OptSpecConfig) -> int:
    """Handle the grammar subcommand."""
    compiled = _compile(args, config)
    if compiled is None:
        return 1
    grammar = compiled[0]
    for node_id in grammar.walk():
        node = grammar.nodes[node_id]
        depth = len(list(grammar.ancestors(node_id)))
        label = render_option(node.option) if node.option is not None else node.name
        if node.command is not None and node.command.implicit:
            label += " (implicit)"
        print(f"{'  ' * depth}{label}")
    return 0


def _cmd_help(args: argparse.Namespace, config: OptSpecConfig) -> int:
    """Handle the help subcommand."""
    compiled = _compile(args, config)
    if compiled is None:
        return 1
    print(render_help(*compiled))
    return 0


def _cmd_compile(args: argparse.Namespace, config: OptSpecConfig) -> int:
    """Handle the compile subcommand."""
    if args.output is None:
        output = Path(config.build_directory)
        compiled = _compile(args, config, output)
    else:
        output = Path(args.output)
        compiled = _compile(args, config)
        if compiled is not None:
            write_artifact(*compiled, output)
    if compiled is None:
        return 1
    print(f"Compiled '{args.spec}' into '{output}'.")
    return 0


def _cmd_parse(args: argparse.Namespace, config: OptSpecConfig) -> int:
    """Handle the parse subcommand."""
    spec = Path(args.spec)
    try:
        source = spec.read_text(encoding="utf-8")
    except OSError as exc:
        print(f"Error: Cannot read usage file '{spec}': {exc}", file=sys.stderr)
        return 1

    builtins = config.builtin_options
    program = OptSpec(
        _program_name(spec, config),
        float=config.float,
        exceptions=True,
        help=builtins.help,
        version=builtins.version,
        quiet=builtins.quiet,
        verbose=builtins.verbose,
        debug=builtins.debug,
    )
    argv = args.args[1:] if args.args[:1] == ["--"] else args.args
    try:
        program.compile(source)
        result, remaining = program.interpret(argv)
    except CompilerError as exc:
        print(f"{spec}:{exc.location}: {exc.message}", file=sys.stderr)
        return 1
    except UserError as exc:
        print(f"{program.name}: {exc.message}", file=sys.stderr)
        return 1
    print(json.dumps({"command": result.to_dict(), "args": list(remaining)}, indent=2, default=str))
    return 0
