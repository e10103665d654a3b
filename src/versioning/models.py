"""Data models for package specifiers, registry metadata and install plans."""

import shlex
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple


@dataclass(frozen=True)
class PackageSpecifier:
    """A parsed ``name[@version]`` token; scoped names keep their leading ``@``."""
    name: str
    version_or_tag: Optional[str] = None

    def __str__(self) -> str:
        if self.version_or_tag:
            return f"{self.name}@{self.version_or_tag}"
        return self.name


@dataclass(frozen=True)
class RegistryMetadata:
    """The subset of an npm packument needed to find peer dependencies."""
    name: str
    versions: Tuple[str, ...]
    dist_tags: Mapping[str, str] = field(default_factory=dict)
    peer_deps_by_version: Mapping[str, Optional[Dict[str, str]]] = field(default_factory=dict)

    @classmethod
    def from_packument(cls, name: str, data: Mapping[str, Any]) -> "RegistryMetadata":
        """Build metadata from the registry's JSON document.

        Raises:
            ValueError: If ``versions`` is missing or not an object.
        """
        versions = data.get("versions")
        if not isinstance(versions, dict):
            raise ValueError("packument has no versions object")
        tags = data.get("dist-tags") or {}
        if not isinstance(tags, dict):
            tags = {}
        peers: Dict[str, Optional[Dict[str, str]]] = {}
        for version, meta in versions.items():
            raw = meta.get("peerDependencies") if isinstance(meta, dict) else None
            peers[version] = dict(raw) if isinstance(raw, dict) else None
        return cls(
            name=name,
            versions=tuple(versions.keys()),
            dist_tags={str(k): str(v) for k, v in tags.items()},
            peer_deps_by_version=peers,
        )


@dataclass(frozen=True)
class InstallPlan:
    """Executable plus argv for one package manager invocation."""
    executable: str
    args: Tuple[str, ...]
    manager: str

    @property
    def argv(self) -> List[str]:
        return [self.executable, *self.args]

    @property
    def command_line(self) -> str:
        """Rendering for display only; tokens with whitespace are shell-quoted."""
        return " ".join(
            shlex.quote(token) if any(c.isspace() for c in token) else token
            for token in [self.manager, *self.args]
        )
