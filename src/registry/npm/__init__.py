"""NPM registry access."""

from .client import RegistryClient, encode_package_name

__all__ = ["RegistryClient", "encode_package_name"]
