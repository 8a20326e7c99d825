"""Tests for paw_plugin_installer.exceptions module."""

import pytest

from paw_plugin_installer.exceptions import (
    InvalidPluginError,
    PluginInstallerError,
    RegistryFileError,
)
from paw_plugin_installer.package import PackageInfo


class TestExceptions:
    """Test exception classes."""

    def test_invalid_plugin_error(self):
        """Test InvalidPluginError message and attributes."""
        package = PackageInfo(pretty_name="Acme/Widgets")

        with pytest.raises(InvalidPluginError, match="Couldn't install Acme/Widgets: bad handle") as exc_info:
            raise InvalidPluginError(package, "bad handle")

        assert exc_info.value.package is package
        assert exc_info.value.reason == "bad handle"

        # Test inheritance
        assert issubclass(InvalidPluginError, PluginInstallerError)
        assert issubclass(InvalidPluginError, Exception)

    def test_invalid_plugin_error_cause(self):
        """Test that a cause is chained."""
        cause = ValueError("underlying")
        error = InvalidPluginError(PackageInfo(pretty_name="acme/widgets"), "broken", cause)
        assert error.__cause__ is cause

    def test_registry_file_error(self):
        """Test RegistryFileError exception."""
        with pytest.raises(RegistryFileError, match="not a mapping"):
            raise RegistryFileError("not a mapping")

        # Test inheritance
        assert issubclass(RegistryFileError, PluginInstallerError)
        assert issubclass(RegistryFileError, ValueError)

    def test_exception_catching(self):
        """Test that specific exceptions can be caught as PluginInstallerError."""
        try:
            raise InvalidPluginError(PackageInfo(pretty_name="acme/widgets"), "test")
        except PluginInstallerError:
            pass  # Should catch it

        try:
            raise RegistryFileError("test")
        except PluginInstallerError:
            pass  # Should catch it
