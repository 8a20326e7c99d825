"""Exceptions for paw-plugin-installer."""


class PluginInstallerError(Exception):
    """Base exception for plugin installer errors."""
    pass


class InvalidPluginError(PluginInstallerError):
    """
    Raised when a plugin package cannot be turned into a valid descriptor.

    Attributes:
        package: The offending package
        reason: Human-readable reason the package was rejected
    """

    def __init__(self, package, reason: str = '', cause=None):
        self.package = package
        self.reason = reason
        super().__init__(f"Couldn't install {package.pretty_name}: {reason}")
        if cause is not None:
            self.__cause__ = cause


class RegistryFileError(PluginInstallerError, ValueError):
    """Raised when the registry file does not hold a mapping of descriptors."""
    pass
