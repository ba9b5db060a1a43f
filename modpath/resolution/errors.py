"""Errors raised when a specifier cannot be resolved.

Every error carries the ORIGINAL request (specifier and starting directory),
not the last intermediate path tried, so failures stay diagnosable through
multi-hop fallbacks.
"""


class ResolutionError(Exception):
    """Base class for all resolution failures."""

    def __init__(self, message: str, *, specifier: str, from_directory: str):
        self.specifier = specifier
        self.from_directory = from_directory
        self.message = message
        super().__init__(message)


class DependencyRootNotFound(ResolutionError):
    """No ancestor directory contains a `node_modules` directory."""


class PackageManifestNotFound(ResolutionError):
    """No `package.json` could be found for a library."""


class PackageEntryNotFound(ResolutionError):
    """The manifest's entry point does not exist under any allowed extension."""


class FileNotFound(ResolutionError):
    """A relative or absolute specifier does not exist on disk."""


class InvalidAncestorPath(PackageManifestNotFound):
    """A target's ancestor path does not exist and escalation is exhausted."""


class InvalidPackageManifest(ResolutionError):
    """A `package.json` file is not a valid JSON object."""


__all__ = [
    "ResolutionError",
    "DependencyRootNotFound",
    "PackageManifestNotFound",
    "PackageEntryNotFound",
    "FileNotFound",
    "InvalidAncestorPath",
    "InvalidPackageManifest",
]
