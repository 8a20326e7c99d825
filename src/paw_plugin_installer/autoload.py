"""
Autoload-based defaults for plugin descriptors.

A plugin package declares PSR-4 style namespace-to-directory mappings, e.g.

    {"psr-4": {"Acme\\\\Widgets\\\\": "src/"}}

From these the resolver derives:
- the base mapping (first single-directory entry, made absolute)
- the entry-point class, when a conventionally named ``Plugin`` class file
  sits directly in a mapped directory
- one path alias per mapping ('@Acme/Widgets' -> '<vendor-dir>/acme/widgets/src')
- the plugin base path, i.e. the directory holding the entry-point class file

Entries mapping one namespace to several directories are skipped.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Dict, Iterator, Optional, Tuple

from .config import DEFAULT_CONFIG, InstallerConfig
from .package import PackageInfo
from .paths import is_absolute_path, normalize_path, portabilize

logger = logging.getLogger(__name__)


@dataclass
class AutoloadDefaults:
    """Aliases and inferred values produced by ``derive_aliases_and_defaults``."""
    aliases: Dict[str, str] = field(default_factory=dict)
    plugin_class: Optional[str] = None
    base_path: Optional[str] = None


class AutoloadResolver:
    """
    Resolves a package's autoload mappings against an install root.

    Args:
        install_root: Directory packages are installed under (the vendor dir)
        config: Installer configuration (entry-point naming, separators)
    """

    def __init__(self, install_root: str, config: Optional[InstallerConfig] = None):
        self.install_root = install_root
        self.config = config or DEFAULT_CONFIG

    def eligible_mappings(self, package: PackageInfo) -> Iterator[Tuple[str, str]]:
        """
        Yield (namespace, absolute directory) pairs in declaration order.

        Relative directories are resolved against the package's install
        location ``<install_root>/<pretty_name>``.
        """
        for namespace, path in package.psr4.items():
            if isinstance(path, (list, tuple)):
                logger.debug(f"Skipping multi-directory autoload entry {namespace!r} of {package.pretty_name}")
                continue
            if not is_absolute_path(path):
                path = f"{self.install_root}/{package.pretty_name}/{path}"
            yield namespace, normalize_path(path)

    def resolve_base_mapping(self, package: PackageInfo) -> Optional[Tuple[str, str]]:
        """Return the first eligible (namespace, directory) pair, or None."""
        return next(self.eligible_mappings(package), None)

    def find_entry_point_class(self, namespace: str, base_path: str) -> Optional[str]:
        """Return '<namespace>Plugin' if the entry-point file exists in ``base_path``."""
        if os.path.isfile(os.path.join(base_path, self.config.entry_point_file)):
            return namespace + self.config.entry_point_name
        return None

    def alias_for(self, namespace: str) -> str:
        """Convert a namespace into an alias key: 'Acme\\\\Widgets\\\\' -> '@Acme/Widgets'."""
        sep = self.config.namespace_separator
        return '@' + namespace.strip(sep).replace(sep, '/')

    def class_file_path(self, namespace: str, directory: str, plugin_class: str) -> Optional[str]:
        """
        Expected source file of ``plugin_class`` under a mapping, or None if the
        class does not belong to ``namespace``.
        """
        if not plugin_class.startswith(namespace):
            return None
        relative = plugin_class[len(namespace):].replace(self.config.namespace_separator, '/')
        return f"{directory}/{relative}{self.config.class_file_extension}"

    def derive_aliases_and_defaults(
        self,
        package: PackageInfo,
        plugin_class: Optional[str] = None,
        base_path: Optional[str] = None,
    ) -> Optional[AutoloadDefaults]:
        """
        Build path aliases and fill in a missing class and base path.

        ``plugin_class`` and ``base_path`` are explicit values already known to
        the caller; they are never replaced. While walking the mappings, the
        first mapping holding the entry-point file supplies the class, and the
        first mapping whose namespace prefixes the class and holds its source
        file supplies the base path. The two can come from different mappings.

        Returns:
            AutoloadDefaults, or None if the package has no eligible mappings
        """
        result = AutoloadDefaults(plugin_class=plugin_class, base_path=base_path)
        found_any = False

        for namespace, directory in self.eligible_mappings(package):
            found_any = True
            result.aliases[self.alias_for(namespace)] = portabilize(directory, self.install_root)

            if result.plugin_class is None:
                result.plugin_class = self.find_entry_point_class(namespace, directory)
                if result.plugin_class is not None:
                    logger.debug(f"Inferred plugin class {result.plugin_class} for {package.pretty_name}")

            if result.base_path is None and result.plugin_class is not None:
                class_file = self.class_file_path(namespace, directory, result.plugin_class)
                if class_file is not None and os.path.isfile(class_file):
                    result.base_path = portabilize(os.path.dirname(class_file), self.install_root)
                    logger.debug(f"Inferred base path {result.base_path} for {package.pretty_name}")

        if not found_any:
            return None
        return result
