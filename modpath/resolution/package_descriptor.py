"""Reading `package.json` manifests and selecting a library entry point."""

import json
import logging
from typing import Any

from ..fs.file_system import FileSystem
from ..fs.path_util import PathUtil
from .errors import InvalidPackageManifest
from .models import ResolutionRequest
from .options import DEFAULT_LIBRARY_ENTRY
from .options import EffectiveOptions

logger = logging.getLogger(__name__)


class PackageDescriptorReader:
    """Loads manifests and picks the entry field by configured priority."""

    def __init__(self, file_system: FileSystem, path_util: PathUtil, options: EffectiveOptions):
        self.file_system = file_system
        self.path_util = path_util
        self.options = options

    def load(self, manifest_path: str, request: ResolutionRequest) -> dict[str, Any]:
        """Parse a manifest into its field map.

        Raises:
            InvalidPackageManifest: File is not a JSON object
        """
        try:
            descriptor = json.loads(self.file_system.read_text(manifest_path))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise InvalidPackageManifest(
                f"Could not read {manifest_path} while resolving '{request.specifier}' "
                f"from '{request.from_directory}': {e}",
                specifier=request.specifier,
                from_directory=request.from_directory,
            ) from e

        if not isinstance(descriptor, dict):
            raise InvalidPackageManifest(
                f"{manifest_path} does not contain a JSON object "
                f"(resolving '{request.specifier}' from '{request.from_directory}')",
                specifier=request.specifier,
                from_directory=request.from_directory,
            )
        return descriptor

    def select_entry(self, descriptor: dict[str, Any]) -> str:
        """Return the first configured field holding a non-empty string.

        Falls back to the default library entry (`index`).
        """
        for field in self.options.package_fields:
            value = descriptor.get(field)
            if isinstance(value, str) and value:
                logger.debug(f"[manifest] entry from '{field}': {value}")
                return value
        return DEFAULT_LIBRARY_ENTRY

    def entry_path_for(self, manifest_path: str, request: ResolutionRequest) -> str:
        """Absolute entry path declared by the manifest at `manifest_path`."""
        entry = self.select_entry(self.load(manifest_path, request))
        return self.path_util.join(self.path_util.parent(manifest_path), entry)
