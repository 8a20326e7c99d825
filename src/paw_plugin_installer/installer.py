"""
Install/update/uninstall hooks for plugin packages.

``PluginInstaller`` wraps the host's physical installer (which copies and
removes package files) and keeps the plugin registry in step with it:

- install:   files in -> build descriptor -> register
- update:    files updated -> unregister old -> build new -> register
- uninstall: files out -> unregister

File changes always happen before registry changes. When a descriptor cannot
be built, both are rolled back in reverse order and the ``InvalidPluginError``
is re-raised to the host.
"""

import logging
from typing import Optional, Protocol

from .config import DEFAULT_CONFIG, InstallerConfig
from .descriptor import PluginDescriptorBuilder
from .package import PackageInfo
from .registry import RegistryStore

logger = logging.getLogger(__name__)


class PhysicalInstaller(Protocol):
    """File-level installer supplied by the host package manager."""

    def install(self, package: PackageInfo) -> None: ...

    def update(self, initial: PackageInfo, target: PackageInfo) -> None: ...

    def uninstall(self, package: PackageInfo) -> None: ...


class InstallationManager(Protocol):
    """Host component that dispatches packages to installers."""

    def add_installer(self, installer) -> None: ...


class PluginInstaller:
    """
    Lifecycle coordinator for plugin-type packages.

    Args:
        physical: Host installer doing the actual file work
        install_root: Directory packages are installed under (the vendor dir)
        config: Installer configuration
        store: Registry store; defaults to one for ``install_root``
        builder: Descriptor builder; defaults to one for ``install_root``
    """

    def __init__(
        self,
        physical: PhysicalInstaller,
        install_root: str,
        config: Optional[InstallerConfig] = None,
        store: Optional[RegistryStore] = None,
        builder: Optional[PluginDescriptorBuilder] = None,
    ):
        self.physical = physical
        self.install_root = install_root
        self.config = config or DEFAULT_CONFIG
        self.store = store or RegistryStore(install_root, self.config)
        self.builder = builder or PluginDescriptorBuilder(install_root, self.config)

    def supports(self, package_type: str) -> bool:
        return package_type == self.config.package_type

    def install(self, package: PackageInfo) -> None:
        self.physical.install(package)

        result = self.builder.build(package)
        if result.error is not None:
            logger.warning(f"Rolling back install of {package.pretty_name}: {result.error.reason}")
            self.physical.uninstall(package)
            raise result.error

        self.store.upsert(package.name, result.descriptor)

    def update(self, initial: PackageInfo, target: PackageInfo) -> None:
        self.physical.update(initial, target)
        previous = self.store.remove(initial.name)

        result = self.builder.build(target)
        if result.error is not None:
            logger.warning(
                f"Rolling back update of {initial.pretty_name} "
                f"({initial.pretty_version} -> {target.pretty_version}): {result.error.reason}"
            )
            self.physical.update(target, initial)
            if previous is not None:
                self.store.upsert(initial.name, previous)
            raise result.error

        self.store.upsert(target.name, result.descriptor)

    def uninstall(self, package: PackageInfo) -> None:
        self.physical.uninstall(package)
        self.store.remove(package.name)


def activate(
    manager: InstallationManager,
    physical: PhysicalInstaller,
    install_root: str,
    config: Optional[InstallerConfig] = None,
) -> PluginInstaller:
    """Create a ``PluginInstaller`` and register it with the host's installation manager."""
    installer = PluginInstaller(physical, install_root, config)
    manager.add_installer(installer)
    logger.debug(f"Activated plugin installer for {install_root}")
    return installer
