"""Nuxt 3 and Nuxt 2 — same package name, told apart by installed version."""

from __future__ import annotations

from functools import partial

from fwscout.adapters.server import ServerAdapter
from fwscout.models import DependencyConstraint, FrameworkDescriptor, FrameworkType, SupportLevel

NUXT = FrameworkDescriptor(
    key="nuxt",
    name="Nuxt",
    support=SupportLevel.EXPERIMENTAL,
    type=FrameworkType.META_FRAMEWORK,
    dependencies=(DependencyConstraint("nuxt", version_range="^3.0.0-0"),),
    overrides=("express",),
    initializer=partial(ServerAdapter, output_dir=".output", public_dir=".output/public"),
)

NUXT2 = FrameworkDescriptor(
    key="nuxt2",
    name="Nuxt 2",
    support=SupportLevel.EXPERIMENTAL,
    type=FrameworkType.META_FRAMEWORK,
    dependencies=(DependencyConstraint("nuxt", version_range="^2.0.0"),),
    overrides=("express",),
    initializer=partial(ServerAdapter, output_dir=".nuxt", public_dir="static"),
)

DESCRIPTORS = (NUXT, NUXT2)
