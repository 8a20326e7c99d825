"""
paw-plugin-installer: Plugin registration for package-manager install hooks.

When a 'paw-plugin' package is installed, updated or removed, this package
derives a descriptor for it (entry-point class, base path, handle, aliases,
display metadata) and keeps a single registry file under the install root in
sync, for the host application to read at runtime.
"""

__version__ = "0.1.0"

from .config import InstallerConfig, DEFAULT_CONFIG
from .paths import VENDOR_DIR_PLACEHOLDER, normalize_path, portabilize, resolve
from .package import PackageInfo, PluginExtra
from .autoload import AutoloadResolver, AutoloadDefaults
from .descriptor import (
    PluginDescriptor,
    PluginDescriptorBuilder,
    BuildResult,
    validate_handle,
)
from .registry import RegistryStore
from .installer import PluginInstaller, PhysicalInstaller, activate
from .exceptions import PluginInstallerError, InvalidPluginError, RegistryFileError

__all__ = [
    # Config
    "InstallerConfig",
    "DEFAULT_CONFIG",
    # Paths
    "VENDOR_DIR_PLACEHOLDER",
    "normalize_path",
    "portabilize",
    "resolve",
    # Packages
    "PackageInfo",
    "PluginExtra",
    # Descriptors
    "AutoloadResolver",
    "AutoloadDefaults",
    "PluginDescriptor",
    "PluginDescriptorBuilder",
    "BuildResult",
    "validate_handle",
    # Registry
    "RegistryStore",
    # Lifecycle
    "PluginInstaller",
    "PhysicalInstaller",
    "activate",
    # Exceptions
    "PluginInstallerError",
    "InvalidPluginError",
    "RegistryFileError",
]
