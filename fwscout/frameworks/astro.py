"""Astro.

Astro drives Vite internally but keeps its own config file, so it is a root
of its own that overrides a bare Vite match.
"""

from __future__ import annotations

from functools import partial

from fwscout.adapters.static import StaticSiteAdapter
from fwscout.models import DependencyConstraint, FrameworkDescriptor, FrameworkType, SupportLevel

ASTRO = FrameworkDescriptor(
    key="astro",
    name="Astro",
    support=SupportLevel.COMMUNITY,
    type=FrameworkType.META_FRAMEWORK,
    required_files=("astro.config.*",),
    dependencies=(DependencyConstraint("astro"),),
    overrides=("express", "vite"),
    initializer=partial(StaticSiteAdapter, output_dir="dist"),
)

DESCRIPTORS = (ASTRO,)
