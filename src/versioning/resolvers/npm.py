"""NPM version and dist-tag resolution against fetched registry metadata."""

import logging
from typing import Dict, List

import semantic_version

from constants import Constants
from errors import NoPeerDependencies, UnknownVersionOrTag
from ..models import RegistryMetadata

logger = logging.getLogger(__name__)


class NpmVersionResolver:
    """Maps a requested version or tag to a published version and its peers.

    No semver range solving is done here: the requested string must name a
    published version or a dist-tag exactly.
    """

    def resolve(self, metadata: RegistryMetadata, requested: str) -> str:
        """Return the concrete version for ``requested``.

        Published versions win over dist-tags when a string is both.

        Raises:
            UnknownVersionOrTag: If neither a version nor a tag matches, or a
                tag points at a version the packument does not list.
        """
        if requested in metadata.versions:
            logger.debug("Resolved %s@%s as a published version", metadata.name, requested)
            return requested

        if requested in metadata.dist_tags:
            version = metadata.dist_tags[requested]
            if version in metadata.versions:
                logger.debug(
                    "Resolved dist-tag %s of %s to %s", requested, metadata.name, version
                )
                return version
            logger.warning(
                "dist-tag %s of %s points at unpublished version %s",
                requested, metadata.name, version,
            )

        raise UnknownVersionOrTag(
            requested,
            tags=sorted(metadata.dist_tags),
            recent_versions=self.recent_versions(metadata.versions),
        )

    def peer_dependencies(self, metadata: RegistryMetadata, version: str) -> Dict[str, str]:
        """Return the peerDependencies published for ``version``, in order.

        Raises:
            NoPeerDependencies: If the mapping is absent or empty.
        """
        peers = metadata.peer_deps_by_version.get(version)
        if not peers:
            raise NoPeerDependencies(metadata.name, version)
        return dict(peers)

    def recent_versions(self, candidates, limit: int = Constants.RECENT_VERSIONS_HINT) -> List[str]:
        """Pick the highest ``limit`` semver-valid versions, newest first."""
        parsed_versions = []
        for v in candidates:
            try:
                parsed_versions.append(semantic_version.Version(v))
            except ValueError:
                continue  # Skip invalid versions
        parsed_versions.sort(reverse=True)
        return [str(v) for v in parsed_versions[:limit]]
