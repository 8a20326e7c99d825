"""Tests for paw_plugin_installer.autoload module."""

from paw_plugin_installer.autoload import AutoloadResolver
from paw_plugin_installer.config import InstallerConfig


class TestEligibleMappings:
    """Test mapping enumeration and base mapping resolution."""

    def test_relative_paths_resolved_against_package_dir(self, install_root, make_package):
        """Test relative mappings resolve under the package directory."""
        package = make_package(autoload={"psr-4": {"Acme\\Widgets\\": "src/"}})
        resolver = AutoloadResolver(install_root)

        assert list(resolver.eligible_mappings(package)) == [
            ("Acme\\Widgets\\", f"{install_root}/acme/widgets/src"),
        ]

    def test_multi_directory_entries_skipped(self, install_root, make_package):
        """Test that multi-directory entries are skipped."""
        package = make_package(autoload={"psr-4": {
            "Acme\\Shared\\": ["lib/", "fallback/"],
            "Acme\\Widgets\\": "src/",
        }})
        resolver = AutoloadResolver(install_root)

        assert resolver.resolve_base_mapping(package) == (
            "Acme\\Widgets\\", f"{install_root}/acme/widgets/src"
        )

    def test_absolute_path_kept(self, install_root, make_package, tmp_path):
        """Test that absolute mappings are kept as declared."""
        package = make_package(autoload={"psr-4": {"Acme\\Widgets\\": str(tmp_path / "elsewhere")}})
        resolver = AutoloadResolver(install_root)

        assert resolver.resolve_base_mapping(package)[1] == f"{tmp_path}/elsewhere"

    def test_no_autoload(self, install_root, make_package):
        """Test a package without autoload mappings."""
        package = make_package()
        resolver = AutoloadResolver(install_root)

        assert resolver.resolve_base_mapping(package) is None
        assert resolver.derive_aliases_and_defaults(package) is None


class TestFindEntryPointClass:
    """Test conventional entry-point class lookup."""

    def test_plugin_file_present(self, install_root, make_package):
        """Test finding the entry-point class file."""
        make_package(files=["src/Plugin.php"])
        resolver = AutoloadResolver(install_root)

        found = resolver.find_entry_point_class("Acme\\Widgets\\", f"{install_root}/acme/widgets/src")
        assert found == "Acme\\Widgets\\Plugin"

    def test_plugin_file_absent(self, install_root, make_package):
        """Test a mapping without an entry-point class file."""
        make_package(files=["src/Other.php"])
        resolver = AutoloadResolver(install_root)

        assert resolver.find_entry_point_class("Acme\\Widgets\\", f"{install_root}/acme/widgets/src") is None

    def test_custom_extension(self, install_root, make_package):
        """Test a configured class file extension."""
        make_package(files=["src/Plugin.py"])
        resolver = AutoloadResolver(install_root, InstallerConfig(class_file_extension=".py"))

        found = resolver.find_entry_point_class("Acme\\Widgets\\", f"{install_root}/acme/widgets/src")
        assert found == "Acme\\Widgets\\Plugin"


class TestDeriveAliasesAndDefaults:
    """Test alias generation and class/base path inference."""

    def test_aliases_for_every_mapping(self, install_root, make_package, tmp_path):
        """Test that every eligible mapping gets an alias."""
        package = make_package(autoload={"psr-4": {
            "Acme\\Widgets\\": "src/",
            "Acme\\Widgets\\Tests\\": "tests",
            "Outside\\": str(tmp_path / "outside"),
        }})
        resolver = AutoloadResolver(install_root)

        derived = resolver.derive_aliases_and_defaults(package)
        assert derived.aliases == {
            "@Acme/Widgets": "<vendor-dir>/acme/widgets/src",
            "@Acme/Widgets/Tests": "<vendor-dir>/acme/widgets/tests",
            "@Outside": f"{tmp_path}/outside",
        }
        assert derived.plugin_class is None
        assert derived.base_path is None

    def test_infers_class_and_base_path(self, install_root, make_package):
        """Test inferring class and base path from one mapping."""
        package = make_package(
            autoload={"psr-4": {"Acme\\Widgets\\": "src/"}},
            files=["src/Plugin.php"],
        )
        resolver = AutoloadResolver(install_root)

        derived = resolver.derive_aliases_and_defaults(package)
        assert derived.plugin_class == "Acme\\Widgets\\Plugin"
        assert derived.base_path == "<vendor-dir>/acme/widgets/src"

    def test_class_from_later_mapping(self, install_root, make_package):
        """Test inferring the class from a later mapping."""
        package = make_package(
            autoload={"psr-4": {
                "Acme\\Lib\\": "lib/",
                "Acme\\Widgets\\": "src/",
            }},
            files=["src/Plugin.php"],
        )
        resolver = AutoloadResolver(install_root)

        derived = resolver.derive_aliases_and_defaults(package)
        assert derived.plugin_class == "Acme\\Widgets\\Plugin"
        assert derived.base_path == "<vendor-dir>/acme/widgets/src"

    def test_base_path_from_different_mapping_than_class(self, install_root, make_package):
        """Test finding the base path through a different mapping."""
        # Explicit class lives in a nested namespace mapped by the second entry
        package = make_package(
            autoload={"psr-4": {
                "Acme\\Widgets\\Api\\": "api/",
                "Acme\\Widgets\\": "src/",
            }},
            files=["src/Core/Main.php"],
        )
        resolver = AutoloadResolver(install_root)

        derived = resolver.derive_aliases_and_defaults(package, plugin_class="Acme\\Widgets\\Core\\Main")
        assert derived.plugin_class == "Acme\\Widgets\\Core\\Main"
        assert derived.base_path == "<vendor-dir>/acme/widgets/src/Core"

    def test_explicit_base_path_kept(self, install_root, make_package):
        """Test that an explicit base path is not replaced."""
        package = make_package(
            autoload={"psr-4": {"Acme\\Widgets\\": "src/"}},
            files=["src/Plugin.php"],
        )
        resolver = AutoloadResolver(install_root)

        derived = resolver.derive_aliases_and_defaults(package, base_path="/custom/path")
        assert derived.base_path == "/custom/path"

    def test_class_file_missing_leaves_base_path_unset(self, install_root, make_package):
        """Test that a missing class file leaves the base path unset."""
        package = make_package(autoload={"psr-4": {"Acme\\Widgets\\": "src/"}}, files=["src/Other.php"])
        resolver = AutoloadResolver(install_root)

        derived = resolver.derive_aliases_and_defaults(package, plugin_class="Acme\\Widgets\\Missing")
        assert derived.base_path is None
