"""CLI entry point for the install flow.

Fetches the package's registry metadata, resolves the requested version,
reads its peer dependencies and hands them to the project's package manager.
"""

from __future__ import annotations

import logging
import os
import subprocess
import sys
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

from constants import Constants, ExitCodes
from errors import (
    InstallProcessFailed,
    InstallTimedOut,
    InvalidSpecifier,
    NoPeerDependencies,
    PeerDepsError,
    RegistryError,
    RegistryUnavailable,
    SpawnFailed,
    UnknownVersionOrTag,
)
from install_plan import build_install_plan, detect_package_manager
from registry.npm.client import RegistryClient
from versioning.models import InstallPlan
from versioning.parser import parse_package_spec
from versioning.resolvers.npm import NpmVersionResolver

logger = logging.getLogger(__name__)


@dataclass
class InstallOptions:
    """Environment facts and switches for one install run."""

    registry_url: Optional[str] = None
    token: Optional[str] = None
    manager: Optional[str] = None  # None -> detect from cwd
    only_peers: bool = False
    extra_args: Sequence[str] = field(default_factory=tuple)
    cwd: Optional[str] = None
    is_windows: bool = sys.platform == "win32"
    install_timeout: Optional[float] = None
    dry_run: bool = False


def _run_plan(plan: InstallPlan, cwd: str, timeout: Optional[float]) -> None:
    """Run the package manager with inherited stdio and wait for it once.

    Raises:
        SpawnFailed: The executable could not be started.
        InstallTimedOut: ``timeout`` elapsed; the child is killed.
        InstallProcessFailed: The child exited non-zero.
    """
    try:
        # stdio is inherited so the manager's progress output renders live
        process = subprocess.Popen(plan.argv, cwd=cwd)  # noqa: S603
    except OSError as exc:
        raise SpawnFailed(plan.executable, exc) from exc

    try:
        code = process.wait(timeout=timeout)
    except subprocess.TimeoutExpired as exc:
        process.kill()
        process.wait()
        raise InstallTimedOut(timeout) from exc
    except BaseException:
        # Ctrl-C or any other interruption must not orphan the installer
        process.kill()
        process.wait()
        raise

    if code != 0:
        raise InstallProcessFailed(code)


def install_peer_deps(
    package_name: str,
    version_or_tag: str,
    dev: bool,
    *,
    options: Optional[InstallOptions] = None,
) -> InstallPlan:
    """Install the peer dependencies of ``package_name@version_or_tag``.

    Returns:
        The plan that was run (or printed, in dry-run mode).

    Raises:
        PeerDepsError: Exactly one subclass describing the failure.
    """
    options = options or InstallOptions()
    cwd = options.cwd or os.getcwd()

    try:
        client = RegistryClient(
            base_url=options.registry_url,
            token=options.token,
        )
    except ValueError as exc:
        raise RegistryUnavailable(str(exc)) from exc

    metadata = client.fetch_metadata(package_name)

    resolver = NpmVersionResolver()
    version = resolver.resolve(metadata, version_or_tag)
    peer_deps = resolver.peer_dependencies(metadata, version)
    logger.debug("Peer dependencies of %s@%s: %s", package_name, version, peer_deps)

    manager = options.manager or detect_package_manager(cwd)
    plan = build_install_plan(
        package_name,
        peer_deps,
        dev,
        manager,
        options.is_windows,
        only_peers=options.only_peers,
        extra_args=options.extra_args,
    )

    print(f"Installing peerdeps for {package_name}@{version}.")
    print(f"{plan.command_line}\n")

    if options.dry_run:
        logger.info("Dry run; not starting %s", plan.executable)
        return plan

    _run_plan(plan, cwd, options.install_timeout)
    logger.info("Installed peer dependencies of %s@%s", package_name, version)
    return plan


def _options_from_args(args: Any) -> InstallOptions:
    manager = getattr(args, "PACKAGE_MANAGER", None) or Constants.PACKAGE_MANAGER
    timeout = getattr(args, "TIMEOUT", None)
    if timeout is None:
        timeout = Constants.INSTALL_TIMEOUT
    return InstallOptions(
        registry_url=getattr(args, "REGISTRY", None) or Constants.REGISTRY_URL_NPM,
        token=getattr(args, "AUTH", None) or Constants.REGISTRY_TOKEN,
        manager=manager,
        only_peers=bool(getattr(args, "ONLY_PEERS", False)),
        extra_args=tuple(getattr(args, "EXTRA_ARGS", None) or ()),
        install_timeout=timeout,
        dry_run=bool(getattr(args, "DRY_RUN", False)),
    )


def run_install(args: Any) -> None:
    """Entry point for the install flow; always exits.

    Args:
        args: Parsed CLI arguments namespace.
    """
    exit_code = ExitCodes.SUCCESS.value
    try:
        spec = parse_package_spec(args.PACKAGE)
        version = spec.version_or_tag or Constants.DEFAULT_TAG
        install_peer_deps(spec.name, version, bool(args.DEV), options=_options_from_args(args))
    except (InvalidSpecifier, NoPeerDependencies) as exc:
        logger.error("%s", exc)
        exit_code = ExitCodes.USER_ERROR.value
    except UnknownVersionOrTag as exc:
        logger.error("%s", exc)
        hint = exc.hint()
        if hint:
            logger.error("Available %s", hint)
        exit_code = ExitCodes.USER_ERROR.value
    except RegistryError as exc:
        logger.error("%s", exc)
        exit_code = ExitCodes.CONNECTION_ERROR.value
    except SpawnFailed as exc:
        logger.error("%s", exc)
        exit_code = ExitCodes.SPAWN_ERROR.value
    except InstallTimedOut as exc:
        logger.error("%s", exc)
        exit_code = ExitCodes.TIMEOUT.value
    except InstallProcessFailed as exc:
        logger.error("%s", exc)
        # Negative codes mean the child died from a signal
        exit_code = exc.code if exc.code > 0 else ExitCodes.USER_ERROR.value
    except PeerDepsError as exc:
        logger.error("%s", exc)
        exit_code = ExitCodes.USER_ERROR.value
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        exit_code = 130  # Standard SIGINT exit code

    sys.exit(exit_code)
