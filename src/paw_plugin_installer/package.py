"""
Package metadata consumed from the host package manager.

The host hands the installer one ``PackageInfo`` per lifecycle event. Only the
fields the plugin installer reads are modelled here.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

VENDOR_SEPARATOR = '/'


@dataclass(frozen=True)
class PluginExtra:
    """
    Plugin-specific overrides read from a package's ``extra`` block.

    Every field is optional; a set field always wins over the derived default.
    Keys not listed here are ignored.
    """
    plugin_class: Optional[str] = None
    base_path: Optional[str] = None
    handle: Optional[str] = None
    name: Optional[str] = None
    version: Optional[str] = None
    description: Optional[str] = None
    author: Optional[str] = None

    @classmethod
    def from_dict(cls, extra: Optional[Mapping[str, Any]]) -> 'PluginExtra':
        extra = extra or {}
        return cls(
            plugin_class=extra.get('class'),
            base_path=extra.get('basePath'),
            handle=extra.get('handle'),
            name=extra.get('name'),
            version=extra.get('version'),
            description=extra.get('description'),
            author=extra.get('author'),
        )


@dataclass
class PackageInfo:
    """
    A package as described by the host package manager.

    Attributes:
        pretty_name: Identifier as declared, e.g. 'Acme/Widgets'
        pretty_version: Resolved version string, e.g. '1.2.0'
        type: Declared package type
        extra: Free-form ``extra`` configuration block
        autoload: Autoload declaration, e.g. {'psr-4': {'Acme\\\\Widgets\\\\': 'src/'}}
        authors: Declared authors, each a mapping with an optional 'name'
        description: Declared description
    """
    pretty_name: str
    pretty_version: str = ''
    type: str = 'paw-plugin'
    extra: Dict[str, Any] = field(default_factory=dict)
    autoload: Dict[str, Any] = field(default_factory=dict)
    authors: List[Dict[str, Any]] = field(default_factory=list)
    description: Optional[str] = None

    @property
    def name(self) -> str:
        """Registry identifier (lower-cased pretty name)."""
        return self.pretty_name.lower()

    @property
    def vendor(self) -> Optional[str]:
        if VENDOR_SEPARATOR not in self.pretty_name:
            return None
        return self.pretty_name.split(VENDOR_SEPARATOR, 1)[0]

    @property
    def short_name(self) -> str:
        if VENDOR_SEPARATOR not in self.pretty_name:
            return self.pretty_name
        return self.pretty_name.split(VENDOR_SEPARATOR, 1)[1]

    @property
    def plugin_extra(self) -> PluginExtra:
        return PluginExtra.from_dict(self.extra)

    @property
    def psr4(self) -> Dict[str, Any]:
        return self.autoload.get('psr-4') or {}

    def first_author_property(self, prop: str) -> Optional[str]:
        """Return ``prop`` of the first listed author, if any."""
        if not self.authors:
            return None
        return self.authors[0].get(prop)
