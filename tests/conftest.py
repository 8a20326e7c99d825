"""Pytest configuration and fixtures for paw_plugin_installer tests."""

import os

import pytest

from paw_plugin_installer.package import PackageInfo


@pytest.fixture
def install_root(tmp_path):
    """Create an empty vendor directory and return it as a string."""
    root = tmp_path / "vendor"
    root.mkdir()
    return str(root)


@pytest.fixture
def make_package(install_root):
    """
    Factory creating a package on disk under the install root.

    Files are given relative to the package directory; each gets placeholder content.
    """
    def factory(pretty_name="acme/widgets", files=(), **kwargs):
        package = PackageInfo(pretty_name=pretty_name, **kwargs)
        for relative in files:
            target = f"{install_root}/{pretty_name}/{relative}"
            os.makedirs(os.path.dirname(target), exist_ok=True)
            with open(target, "w") as f:
                f.write("<?php\n")
        return package

    return factory


class FakePhysicalInstaller:
    """Records the file-level calls made by the plugin installer."""

    def __init__(self):
        self.calls = []

    def install(self, package):
        self.calls.append(("install", package.pretty_name, package.pretty_version))

    def update(self, initial, target):
        self.calls.append(("update", initial.pretty_version, target.pretty_version))

    def uninstall(self, package):
        self.calls.append(("uninstall", package.pretty_name, package.pretty_version))


@pytest.fixture
def physical():
    return FakePhysicalInstaller()
