"""lockstep - fingerprint, update and patch dependency files.

    Returns:
        int: Exit code
"""
import logging
import sys

from args import parse_args
from cli_config import apply_cli_overrides, load_settings
from common.console import print_files_table, print_push_report
from common.logging_utils import add_file_handler, configure_logging, extra_context, is_debug_enabled
from constants import ExitCodes
from errors import ApiError, ConfigError, FileLoadError, IntegrityError, PatchError, ExecutionError

logger = logging.getLogger(__name__)


def run_files(args, settings):
    from depfiles.discovery import lookup_dependency_files  # pylint: disable=import-outside-toplevel
    files = lookup_dependency_files(args.PATHS, settings.project_dir, settings.ignored_paths)
    if not files:
        logger.warning("No dependency files found.")
        return ExitCodes.SUCCESS.value
    print_files_table(files)
    return ExitCodes.SUCCESS.value


def run_push(args, settings):
    from api.client import push_dependency_files  # pylint: disable=import-outside-toplevel
    from depfiles.discovery import lookup_dependency_files  # pylint: disable=import-outside-toplevel
    files = lookup_dependency_files(args.PATHS, settings.project_dir, settings.ignored_paths)
    report = push_dependency_files(settings.project_slug, files, settings)
    print_push_report(report)
    return ExitCodes.SUCCESS.value


def run_patch(args, settings):
    from depfiles.models import DependencyFile  # pylint: disable=import-outside-toplevel
    from depfiles.patch import apply_patch  # pylint: disable=import-outside-toplevel
    if args.PATCH == "-":
        patch_data = sys.stdin.buffer.read()
    else:
        with open(args.PATCH, "rb") as f:
            patch_data = f.read()
    dep_file = DependencyFile.from_path(args.FILE)
    apply_patch(dep_file, patch_data, settings.patch_command)
    print(f"{dep_file.path}  {dep_file.sha}")
    return ExitCodes.SUCCESS.value


def run_verify(args, settings):  # pylint: disable=unused-argument
    from depfiles.models import DependencyFile  # pylint: disable=import-outside-toplevel
    DependencyFile(path=args.FILE, sha=args.SHA, content=b"").verify_integrity()
    logger.info("%s: signature ok", args.FILE)
    return ExitCodes.SUCCESS.value


def run_update(args, settings):
    from cli_update import run_update as _run_update  # pylint: disable=import-outside-toplevel
    return _run_update(args, settings)


COMMANDS = {
    "files": run_files,
    "push": run_push,
    "update": run_update,
    "patch": run_patch,
    "verify": run_verify,
}


def dispatch(args):
    """Run the selected command and map errors to exit codes."""
    try:
        settings = load_settings(args.CONFIG, args.DIRECTORY)
        apply_cli_overrides(settings, args)
        return COMMANDS[args.action](args, settings)
    except ConfigError as e:
        logger.error("Configuration error: %s", e)
        return ExitCodes.CONFIG_ERROR.value
    except IntegrityError as e:
        logger.error("%s", e)
        return ExitCodes.INTEGRITY_ERROR.value
    except PatchError as e:
        logger.error("%s", e)
        return ExitCodes.PATCH_ERROR.value
    except ExecutionError as e:
        logger.error("%s", e)
        return ExitCodes.EXECUTION_ERROR.value
    except ApiError as e:
        logger.error("%s", e)
        return ExitCodes.CONNECTION_ERROR.value
    except (FileLoadError, OSError) as e:
        logger.error("File error: %s", e)
        return ExitCodes.FILE_ERROR.value


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    configure_logging(args.LOG_LEVEL)
    if args.LOG_FILE:
        add_file_handler(args.LOG_FILE)
        logger.info("Logging to file: %s", args.LOG_FILE)

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action=args.action)
        )

    exit_code = dispatch(args)

    if is_debug_enabled(logger):
        logger.debug(
            "CLI finished",
            extra=extra_context(event="function_exit", component="cli", action=args.action,
                                outcome="success" if exit_code == 0 else "failure")
        )
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
