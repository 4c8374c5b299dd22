"""Argument parsing functionality for lockstep."""

import argparse

from constants import Constants


def _add_common(parser):
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        default='INFO')
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML, YML, or JSON)",
                        action="store",
                        type=str)
    parser.add_argument("-C", "--directory",
                        dest="DIRECTORY",
                        help="Project directory (default: current directory)",
                        action="store",
                        type=str,
                        default=".")


def build_parser():
    """Build the top-level parser with one sub-parser per command."""
    parser = argparse.ArgumentParser(
        prog="lockstep",
        description="lockstep - fingerprint, update and patch dependency files",
        add_help=True,
    )
    sub = parser.add_subparsers(dest="action", metavar="COMMAND")
    sub.required = True

    files = sub.add_parser("files", help="List dependency files and their fingerprints")
    _add_common(files)
    files.add_argument("PATHS", nargs="*",
                       help="Files to list; scan the project directory when omitted")
    files.add_argument("-i", "--ignore",
                       dest="IGNORE",
                       help="Glob of file or directory names to skip (repeatable)",
                       action="append", type=str, default=[])

    push = sub.add_parser("push", help="Send dependency files to the API")
    _add_common(push)
    push.add_argument("PATHS", nargs="*",
                      help="Files to push; scan the project directory when omitted")
    push.add_argument("-p", "--project",
                      dest="PROJECT_SLUG",
                      help="Project slug on the API",
                      action="store", type=str)
    push.add_argument("--token",
                      dest="API_TOKEN",
                      help="API token (prefer the %s variable)" % Constants.ENV_API_TOKEN,
                      action="store", type=str)
    push.add_argument("-i", "--ignore",
                      dest="IGNORE",
                      help="Glob of file or directory names to skip (repeatable)",
                      action="append", type=str, default=[])

    update = sub.add_parser("update", help="Apply version updates with the package manager")
    _add_common(update)
    update.add_argument("-t", "--type",
                        dest="ECOSYSTEM",
                        help="Package ecosystem, i.e: %s" % ", ".join(Constants.SUPPORTED_ECOSYSTEMS),
                        action="store", type=str,
                        required=True)
    input_group = update.add_mutually_exclusive_group(required=True)
    input_group.add_argument("-u", "--update",
                             dest="UPDATES",
                             help="Version update as name:old:target (repeatable)",
                             action="append", type=str)
    input_group.add_argument("-l", "--load_list",
                             dest="UPDATES_FILE",
                             help="JSON file holding a list of version updates",
                             action="store", type=str)
    update.add_argument("--command",
                        dest="UPDATE_COMMAND",
                        help="Override the base update command",
                        action="store", type=str)
    update.add_argument("--no-restore",
                        dest="NO_RESTORE",
                        help="Leave files as they are when the update fails",
                        action="store_true")
    update.add_argument("-o", "--output",
                        dest="OUTPUT",
                        help="Write original and updated files as JSON",
                        action="store", type=str)

    patch = sub.add_parser("patch", help="Apply a unified diff to a dependency file")
    _add_common(patch)
    patch.add_argument("FILE", help="File to patch")
    patch.add_argument("PATCH", help="Patch file, or - to read from stdin")
    patch.add_argument("--patch-command",
                       dest="PATCH_COMMAND",
                       help="Override the patch command",
                       action="store", type=str)

    verify = sub.add_parser("verify", help="Check a file against an expected fingerprint")
    _add_common(verify)
    verify.add_argument("FILE", help="File to check")
    verify.add_argument("SHA", help="Expected fingerprint")

    return parser


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    return build_parser().parse_args(argv)
