"""Installer configuration."""

from dataclasses import dataclass


@dataclass(frozen=True)
class InstallerConfig:
    """
    Configuration for plugin installation behavior.

    Attributes:
        package_type: Package type handled by the installer
        registry_file: Registry file path, relative to the install root
        entry_point_name: Conventional short name of a plugin's entry-point class
        class_file_extension: Extension of a class source file
        namespace_separator: Separator between namespace segments
        json_indent: Indentation used when writing the registry file
    """
    package_type: str = "paw-plugin"
    registry_file: str = "pawcode/plugins.json"
    entry_point_name: str = "Plugin"
    class_file_extension: str = ".php"
    namespace_separator: str = "\\"
    json_indent: int = 4

    @property
    def entry_point_file(self) -> str:
        """File name of the conventional entry-point class (e.g. 'Plugin.php')."""
        return f"{self.entry_point_name}{self.class_file_extension}"


DEFAULT_CONFIG = InstallerConfig()
