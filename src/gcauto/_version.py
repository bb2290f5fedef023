"""
Version lookup for gcauto.

The version reported by ``gcauto -version`` comes from the installed
distribution metadata. When the package is imported from a source tree
without being installed, a development version derived from the base
version is reported instead.

Format of the fallback: {major}.0.dev0
Example: 0.0.dev0
"""

from importlib import metadata

DISTRIBUTION_NAME = "gcauto"


def get_version(base_version: str, distribution: str = DISTRIBUTION_NAME) -> str:
    """
    Return the version string for the given distribution.

    Args:
        base_version: The base/major version (e.g., "0") used for the fallback.
        distribution: Name of the installed distribution to look up.

    Returns:
        The installed version, or ``{base_version}.0.dev0`` if the
        distribution is not installed.
    """
    try:
        return metadata.version(distribution)
    except metadata.PackageNotFoundError:
        return f"{base_version}.0.dev0"
