"""gomodrules - Import Go module dependencies as repository rules

    Returns:
        int: Exit code
"""
import functools
import logging
import sys

from args import parse_args
from cli_config import infer_output_format, load_config, resolve_settings
from common.logging_utils import add_file_handler, configure_logging, extra_context, is_debug_enabled
from constants import ExitCodes, OutputFormats
from export import export_csv, export_json, rules_to_json, write_csv
from repo.errors import ModuleDecodeError, ModuleImportError, ResolverError
from repo.golist import find_go_tool, go_list_modules
from repo.modules import import_repo_rules_modules


def _exit_code_for(error: ModuleImportError) -> int:
    """Map an import failure onto a process exit code."""
    if isinstance(error, ResolverError):
        return ExitCodes.RESOLVER_ERROR.value
    if isinstance(error, ModuleDecodeError):
        return ExitCodes.DECODE_ERROR.value
    return ExitCodes.FILE_ERROR.value


def emit(rules, args, output_format):
    """Write rules to --output, or to stdout unless --quiet."""
    output = getattr(args, "OUTPUT", None)
    if output:
        if output_format == OutputFormats.CSV.value:
            export_csv(rules, output)
        else:
            export_json(rules, output)
        return
    if getattr(args, "QUIET", False):
        return
    if output_format == OutputFormats.CSV.value:
        write_csv(rules, sys.stdout)
    else:
        sys.stdout.write(rules_to_json(rules) + "\n")


def main(argv=None):
    """Main function of the program."""
    logger = logging.getLogger(__name__)

    args = parse_args(argv)
    configure_logging(args.LOG_LEVEL)
    if args.LOG_FILE:
        add_file_handler(args.LOG_FILE)
        logger.info("Logging to file: %s", args.LOG_FILE)

    settings = resolve_settings(args, load_config(args.CONFIG))
    logging.getLogger().setLevel(getattr(logging, settings.log_level, logging.INFO))

    go_tool = find_go_tool(settings.tool_environ())
    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(
                event="function_entry",
                component="cli",
                action="main",
                target=args.MANIFEST,
                go_tool=go_tool,
            ),
        )

    logger.info("Importing repository rules from %s", args.MANIFEST)
    try:
        rules = import_repo_rules_modules(
            args.MANIFEST,
            list_modules=functools.partial(go_list_modules, go_tool=go_tool),
        )
    except ModuleImportError as e:
        logger.error("%s", e)
        sys.exit(_exit_code_for(e))

    logger.info("Imported %d repository rules.", len(rules))

    output_format = infer_output_format(getattr(args, "OUTPUT", None), settings.output_format)
    try:
        emit(rules, args, output_format)
    except OSError as e:
        logger.error("Output couldn't be written: %s", e)
        sys.exit(ExitCodes.FILE_ERROR.value)

    sys.exit(ExitCodes.SUCCESS.value)


if __name__ == "__main__":
    main()
