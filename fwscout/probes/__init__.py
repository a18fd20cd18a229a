"""Read-only probes over the filesystem, installed packages and build tools."""

from fwscout.probes.buildtool import ConfigProbe, ViteConfigProbe
from fwscout.probes.dependencies import DependencyGraph, InstalledDependency, NpmDependencyGraph
from fwscout.probes.files import any_match

__all__ = [
    "ConfigProbe",
    "DependencyGraph",
    "InstalledDependency",
    "NpmDependencyGraph",
    "ViteConfigProbe",
    "any_match",
]
