"""
Plugin descriptors and the rules for building them from package metadata.

Derivation order per field: an override in the package's ``extra`` block always
wins, then the autoload-derived default, then the package metadata itself.

Validation, in priority order:
1. no entry-point class  -> "unable to determine entry-point class"
2. no base path          -> "unable to determine base path"
3. bad or missing handle -> "invalid or missing handle"
"""

import logging
import re
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, Optional

from .autoload import AutoloadResolver
from .config import DEFAULT_CONFIG, InstallerConfig
from .exceptions import InvalidPluginError
from .package import VENDOR_SEPARATOR, PackageInfo
from .paths import portabilize

logger = logging.getLogger(__name__)

HANDLE_PATTERN = re.compile(r'[A-Za-z][A-Za-z0-9_-]*')

MISSING_CLASS = "unable to determine entry-point class"
MISSING_BASE_PATH = "unable to determine base path"
INVALID_HANDLE = "invalid or missing handle"

# Legacy spelling written by older installers
_LEGACY_ALIASES_KEY = 'aliase'


def validate_handle(handle: Any) -> bool:
    """Return True if ``handle`` is a string matching ``HANDLE_PATTERN``."""
    return isinstance(handle, str) and HANDLE_PATTERN.fullmatch(handle) is not None


@dataclass(frozen=True)
class PluginDescriptor:
    """
    Registry record for one installed plugin.

    ``base_path`` and ``aliases`` values are either absolute paths or portable
    paths starting with the '<vendor-dir>' placeholder.
    """
    entry_point_class: str
    base_path: str
    handle: str
    aliases: Dict[str, str] = field(default_factory=dict)
    display_name: Optional[str] = None
    version: Optional[str] = None
    description: Optional[str] = None
    author: Optional[str] = None

    def map_paths(self, func: Callable[[str], str]) -> 'PluginDescriptor':
        """Return a copy with ``func`` applied to the base path and every alias path."""
        return replace(
            self,
            base_path=func(self.base_path) if self.base_path is not None else None,
            aliases={alias: func(path) for alias, path in self.aliases.items()},
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the registry wire format, omitting unset optional keys."""
        data = {
            'class': self.entry_point_class,
            'basePath': self.base_path,
            'handle': self.handle,
        }
        if self.aliases:
            data['aliases'] = dict(self.aliases)
        for key, value in (
            ('name', self.display_name),
            ('version', self.version),
            ('description', self.description),
            ('author', self.author),
        ):
            if value is not None:
                data[key] = value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PluginDescriptor':
        aliases = data.get('aliases')
        if aliases is None:
            aliases = data.get(_LEGACY_ALIASES_KEY)
        return cls(
            entry_point_class=data.get('class'),
            base_path=data.get('basePath'),
            handle=data.get('handle'),
            aliases=dict(aliases or {}),
            display_name=data.get('name'),
            version=data.get('version'),
            description=data.get('description'),
            author=data.get('author'),
        )


@dataclass(frozen=True)
class BuildResult:
    """Outcome of ``PluginDescriptorBuilder.build``: a descriptor or an error."""
    descriptor: Optional[PluginDescriptor] = None
    error: Optional[InvalidPluginError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> PluginDescriptor:
        """Return the descriptor, raising the error if the build failed."""
        if self.error is not None:
            raise self.error
        return self.descriptor


class PluginDescriptorBuilder:
    """
    Builds validated plugin descriptors for packages under one install root.

    Args:
        install_root: Directory packages are installed under (the vendor dir)
        config: Installer configuration
    """

    def __init__(self, install_root: str, config: Optional[InstallerConfig] = None):
        self.install_root = install_root
        self.config = config or DEFAULT_CONFIG
        self.resolver = AutoloadResolver(install_root, self.config)

    def build(self, package: PackageInfo) -> BuildResult:
        extra = package.plugin_extra

        default_class = None
        default_base_path = None
        mapping = self.resolver.resolve_base_mapping(package)
        if mapping is not None:
            namespace, directory = mapping
            default_class = self.resolver.find_entry_point_class(namespace, directory)
            default_base_path = portabilize(directory, self.install_root)
        default_handle = package.pretty_name.replace(VENDOR_SEPARATOR, '-')

        plugin_class = extra.plugin_class if extra.plugin_class is not None else default_class
        base_path = extra.base_path
        handle = extra.handle if extra.handle is not None else default_handle

        aliases = {}
        derived = self.resolver.derive_aliases_and_defaults(package, plugin_class, base_path)
        if derived is not None:
            aliases = derived.aliases
            plugin_class = derived.plugin_class
            base_path = derived.base_path
        if base_path is None:
            base_path = default_base_path

        if plugin_class is None:
            return self._fail(package, MISSING_CLASS)
        if base_path is None:
            return self._fail(package, MISSING_BASE_PATH)
        if not validate_handle(handle):
            return self._fail(package, INVALID_HANDLE)

        descriptor = PluginDescriptor(
            entry_point_class=plugin_class,
            base_path=base_path,
            handle=handle,
            aliases=aliases,
            display_name=extra.name if extra.name is not None else package.short_name,
            version=extra.version if extra.version is not None else package.pretty_version,
            description=self._description(package),
            author=self._author(package),
        )
        logger.debug(f"Built descriptor for {package.pretty_name}: {descriptor}")
        return BuildResult(descriptor=descriptor)

    @staticmethod
    def _fail(package: PackageInfo, reason: str) -> BuildResult:
        logger.debug(f"Rejected {package.pretty_name}: {reason}")
        return BuildResult(error=InvalidPluginError(package, reason))

    @staticmethod
    def _description(package: PackageInfo) -> Optional[str]:
        extra = package.plugin_extra
        if extra.description is not None:
            return extra.description
        return package.description or None

    @staticmethod
    def _author(package: PackageInfo) -> Optional[str]:
        extra = package.plugin_extra
        if extra.author is not None:
            return extra.author
        return package.first_author_property('name') or package.vendor
