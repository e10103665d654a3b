"""Error taxonomy for the peer dependency installer.

Library code raises these; only the CLI layer maps them to exit codes.
"""

from typing import Optional, Sequence


class PeerDepsError(Exception):
    """Base class for every failure the installer reports."""


class InvalidSpecifier(PeerDepsError, ValueError):
    """The package token does not match ``name[@version]``."""

    def __init__(self, token: str):
        self.token = token
        super().__init__(f"Invalid package specifier: {token!r}")


class RegistryError(PeerDepsError):
    """Base for failures talking to the registry."""


class RegistryUnavailable(RegistryError):
    """Transport failure; the message is the transport's own."""


class PackageNotFound(RegistryError):
    """The registry answered 404 for the package."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Package {name} was not found in the registry.")


class UnknownVersionOrTag(PeerDepsError):
    """Requested string is neither a published version nor a dist-tag."""

    def __init__(
        self,
        requested: str,
        tags: Sequence[str] = (),
        recent_versions: Sequence[str] = (),
    ):
        self.requested = requested
        self.tags = list(tags)
        self.recent_versions = list(recent_versions)
        super().__init__("That version or tag does not exist.")

    def hint(self) -> str:
        """Human readable list of what does exist."""
        parts = []
        if self.tags:
            parts.append("tags: " + ", ".join(self.tags))
        if self.recent_versions:
            parts.append("recent versions: " + ", ".join(self.recent_versions))
        return "; ".join(parts)


class NoPeerDependencies(PeerDepsError):
    def __init__(self, name: str, version: str):
        self.name = name
        self.version = version
        super().__init__(
            f"The package {name}@{version} has no peer dependencies. "
            "Use yarn or npm to install it manually."
        )


class SpawnFailed(PeerDepsError):
    """The package manager executable could not be launched."""

    def __init__(self, executable: str, cause: OSError):
        self.executable = executable
        self.cause = cause
        super().__init__(f"Could not run {executable}: {cause}")


class InstallProcessFailed(PeerDepsError):
    def __init__(self, code: int):
        self.code = code
        super().__init__(f"The install process exited with error code {code}.")


class InstallTimedOut(PeerDepsError):
    def __init__(self, timeout: Optional[float]):
        self.timeout = timeout
        super().__init__(f"The install process did not finish within {timeout} seconds.")
