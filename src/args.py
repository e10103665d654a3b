"""Argument parsing functionality for install-peerdeps."""

import argparse
from constants import Constants, PackageManagers


def _positive_seconds(value):
    """argparse type: a strictly positive number of seconds."""
    try:
        seconds = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number of seconds: {value!r}") from None
    if seconds <= 0:
        raise argparse.ArgumentTypeError(f"timeout must be greater than 0, got {value}")
    return seconds


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="install-peerdeps",
        description=(
            "Install a package together with the peer dependencies it declares"
        ),
        add_help=True,
    )

    parser.add_argument("PACKAGE",
                        help="Package to install, as name or name@version-or-tag "
                             "(scoped names like @scope/name are supported)",
                        type=str)
    parser.add_argument("-D", "--dev",
                        dest="DEV",
                        help="Install the package and its peers as devDependencies.",
                        action="store_true")
    parser.add_argument("-o", "--only-peers",
                        dest="ONLY_PEERS",
                        help="Install only the peer dependencies, not the package itself.",
                        action="store_true")
    parser.add_argument("-r", "--registry",
                        dest="REGISTRY",
                        help=f"Registry base URL (default: {Constants.REGISTRY_URL_NPM})",
                        action="store",
                        type=str)
    parser.add_argument("--auth",
                        dest="AUTH",
                        help="Bearer token for a private registry",
                        action="store",
                        type=str)

    manager_group = parser.add_mutually_exclusive_group()
    manager_group.add_argument("--yarn",
                               dest="PACKAGE_MANAGER",
                               help="Force yarn instead of detecting from yarn.lock",
                               action="store_const",
                               const=PackageManagers.YARN.value)
    manager_group.add_argument("--npm",
                               dest="PACKAGE_MANAGER",
                               help="Force npm instead of detecting from yarn.lock",
                               action="store_const",
                               const=PackageManagers.NPM.value)

    parser.add_argument("-x", "--extra-args",
                        dest="EXTRA_ARGS",
                        help="Extra argument passed to the package manager (repeatable; "
                             "use --extra-args=--flag for values starting with a dash)",
                        action="append",
                        type=str,
                        default=[])
    parser.add_argument("--timeout",
                        dest="TIMEOUT",
                        help="Seconds to wait for the package manager before killing it",
                        action="store",
                        type=_positive_seconds)
    parser.add_argument("--dry-run",
                        dest="DRY_RUN",
                        help="Print the install command without running it.",
                        action="store_true")
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to YAML configuration file",
                        action="store",
                        type=str)
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        default='INFO')
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)

    return parser.parse_args(argv)
