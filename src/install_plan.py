"""Per-manager install command construction.

Turns a package name and its peer dependencies into the argv for npm or
yarn. Building is pure; detecting which manager a project uses is a
separate probe so the builder can be tested without a filesystem.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Dict, Mapping, Sequence

from constants import Constants, PackageManagers
from versioning.models import InstallPlan

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ManagerFlags:
    """Subcommand and persistence flags for one package manager."""

    subcommand: str
    dev_flag: str
    save_flag: str = ""


_MANAGER_FLAGS: Dict[str, ManagerFlags] = {
    PackageManagers.NPM.value: ManagerFlags(
        subcommand="install", dev_flag="--save-dev", save_flag="--save"
    ),
    # yarn records dependencies in package.json without a flag
    PackageManagers.YARN.value: ManagerFlags(subcommand="add", dev_flag="--dev"),
}


def detect_package_manager(cwd: str) -> str:
    """Return "yarn" if the project has a yarn.lock, else "npm"."""
    if os.path.isfile(os.path.join(cwd, Constants.YARN_LOCK_FILE)):
        logger.debug("Found %s in %s; using yarn", Constants.YARN_LOCK_FILE, cwd)
        return PackageManagers.YARN.value
    return PackageManagers.NPM.value


def build_install_plan(
    package_name: str,
    peer_deps: Mapping[str, str],
    dev: bool,
    manager: str,
    is_windows: bool,
    *,
    only_peers: bool = False,
    extra_args: Sequence[str] = (),
) -> InstallPlan:
    """Build the install invocation.

    Args:
        package_name: Package to install alongside its peers, left unpinned.
        peer_deps: Mapping of dependency name to published range.
        dev: Record the packages as dev dependencies.
        manager: "npm" or "yarn".
        is_windows: Append ".cmd" to the executable.
        only_peers: Leave the package itself out of the install.
        extra_args: Passed through after the generated flags.

    Returns:
        InstallPlan with one argv entry per token.
    """
    flags = _MANAGER_FLAGS.get(manager)
    if flags is None:
        raise ValueError(
            f"Unsupported package manager {manager!r}; expected one of "
            + ", ".join(Constants.SUPPORTED_MANAGERS)
        )

    args = [flags.subcommand]
    if not only_peers:
        args.append(package_name)
    args.extend(f"{dep}@{rng}" for dep, rng in peer_deps.items())
    if dev:
        args.append(flags.dev_flag)
    elif flags.save_flag:
        args.append(flags.save_flag)
    args.extend(arg for arg in extra_args if arg)

    executable = manager + (Constants.WINDOWS_EXECUTABLE_SUFFIX if is_windows else "")
    return InstallPlan(executable=executable, args=tuple(args), manager=manager)
