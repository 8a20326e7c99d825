"""
Durable plugin registry for one install root.

The registry is a single JSON file (``InstallerConfig.registry_file``, relative
to the install root) mapping package identifiers to plugin descriptors:

    {
        "acme/widgets": {
            "class": "Acme\\\\Widgets\\\\Plugin",
            "basePath": "<vendor-dir>/acme/widgets/src",
            "handle": "acme-widgets",
            ...
        }
    }

Every mutation is a full read-modify-write cycle: ``load`` the file, change the
mapping, ``save`` it back through a temp file and ``os.replace``. There is no
locking; one process is assumed to mutate an install root at a time.

Paths under the install root are stored with the '<vendor-dir>' placeholder.
``read_resolved`` expands them against the install root the store was created
with, so a registry copied along with its vendor directory keeps working.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional

from .config import DEFAULT_CONFIG, InstallerConfig
from .descriptor import PluginDescriptor
from .exceptions import RegistryFileError
from .paths import portabilize, resolve

logger = logging.getLogger(__name__)

Registry = Dict[str, PluginDescriptor]


def _read_document(path: str) -> Dict[str, Any]:
    """Parse a registry file and check it maps identifiers to objects."""
    with open(path, 'r', encoding='utf-8') as f:
        document = json.load(f)
    if not isinstance(document, dict):
        raise RegistryFileError(f"Registry file {path} does not contain a JSON object")
    for key, value in document.items():
        if not isinstance(value, dict):
            raise RegistryFileError(f"Registry entry {key!r} in {path} is not an object")
    return document


def _atomic_write_text(path: Path, text: str) -> None:
    """Write ``text`` to a temp file next to ``path`` and move it into place."""
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent))
    try:
        with os.fdopen(tmp_fd, 'w', encoding='utf-8') as handle:
            handle.write(text)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_name, str(path))
    finally:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)


class RegistryStore:
    """
    Load/save access to the plugin registry of one install root.

    Args:
        install_root: Directory packages are installed under (the vendor dir)
        config: Installer configuration (registry location, JSON indent)
    """

    def __init__(self, install_root: str, config: Optional[InstallerConfig] = None):
        self.install_root = install_root
        self.config = config or DEFAULT_CONFIG
        self.path = Path(install_root) / self.config.registry_file

    def _read(self) -> Optional[Dict[str, Any]]:
        if not self.path.is_file():
            return None
        return _read_document(str(self.path))

    def _portabilize(self, path: str) -> str:
        return portabilize(path, self.install_root)

    def load(self) -> Registry:
        """
        Load the registry, portabilizing every stored path under the install root.

        Returns:
            Mapping of package identifier to descriptor (empty if no file exists)
        """
        document = self._read()
        if document is None:
            logger.debug(f"No plugin registry at {self.path}")
            return {}

        plugins = {}
        for package_id, data in document.items():
            if 'aliase' in data and 'aliases' not in data:
                logger.warning(f"Migrating legacy 'aliase' key for {package_id} in {self.path}")
            plugins[package_id] = PluginDescriptor.from_dict(data).map_paths(self._portabilize)
        return plugins

    def save(self, plugins: Registry) -> None:
        """
        Rewrite the whole registry file.

        Paths are resolved against the current install root and written back in
        portable form, so the placeholder appears literally in the file.
        """
        document = {}
        for package_id, descriptor in plugins.items():
            canonical = descriptor.map_paths(
                lambda path: self._portabilize(resolve(path, self.install_root))
            )
            document[package_id] = canonical.to_dict()

        text = json.dumps(document, indent=self.config.json_indent, ensure_ascii=False) + '\n'
        _atomic_write_text(self.path, text)
        logger.info(f"💾 Saved {len(document)} plugins to {self.path}")

    def get(self, package_id: str) -> Optional[PluginDescriptor]:
        return self.load().get(package_id)

    def upsert(self, package_id: str, descriptor: PluginDescriptor) -> None:
        """Register ``descriptor`` under ``package_id``, replacing any existing entry."""
        plugins = self.load()
        plugins[package_id] = descriptor
        self.save(plugins)
        logger.info(f"Registered plugin {package_id} ({descriptor.handle})")

    def remove(self, package_id: str) -> Optional[PluginDescriptor]:
        """
        Unregister ``package_id``.

        Returns:
            The removed descriptor, or None if it was not registered (nothing is written)
        """
        plugins = self.load()
        if package_id not in plugins:
            return None
        descriptor = plugins.pop(package_id)
        self.save(plugins)
        logger.info(f"Unregistered plugin {package_id}")
        return descriptor

    def read_resolved(self) -> Registry:
        """Registry as the host runtime sees it: portable paths expanded to absolute."""
        return {
            package_id: descriptor.map_paths(lambda path: resolve(path, self.install_root))
            for package_id, descriptor in self.load().items()
        }
