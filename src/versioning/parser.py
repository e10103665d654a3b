"""Token parsing utilities for package specifiers."""

import re

from errors import InvalidSpecifier
from .models import PackageSpecifier

# Groups: bare name (scope/name without the leading @), "@version", version.
# Versions may contain letters, digits, dots and dashes (e.g. 4.0.0-beta).
_SPEC_RE = re.compile(r"^@?([/\w-]+)(@([\w.-]+))?$", re.ASCII)


def parse_package_spec(token: str) -> PackageSpecifier:
    """Parse ``name``, ``name@version``, ``@scope/name`` or ``@scope/name@version``.

    The version part is left as ``None`` when absent; callers pick the default.

    Raises:
        InvalidSpecifier: If the token does not match the grammar.
    """
    if not isinstance(token, str):
        raise InvalidSpecifier(repr(token))
    stripped = token.strip()
    match = _SPEC_RE.match(stripped)
    if match is None:
        raise InvalidSpecifier(token)

    name = match.group(1)
    if stripped.startswith("@"):
        name = f"@{name}"
    return PackageSpecifier(name=name, version_or_tag=match.group(3))
