"""Vite and the UI frameworks that build on it.

Vite is a pluggable toolchain: the frameworks below all ship a Vite plugin,
and are told apart by which plugin the resolved production config loads.
"""

from __future__ import annotations

from functools import partial

from fwscout.adapters.server import ServerAdapter
from fwscout.adapters.static import StaticSiteAdapter
from fwscout.models import DependencyConstraint, FrameworkDescriptor, FrameworkType, SupportLevel

VITE = FrameworkDescriptor(
    key="vite",
    name="Vite",
    support=SupportLevel.EXPERIMENTAL,
    type=FrameworkType.TOOLCHAIN,
    dependencies=(DependencyConstraint("vite"),),
    toolchain="vite",
    initializer=partial(StaticSiteAdapter, output_dir="dist"),
)

REACT = FrameworkDescriptor(
    key="react",
    name="React",
    support=SupportLevel.EXPERIMENTAL,
    type=FrameworkType.FRAMEWORK,
    parent="vite",
    dependencies=(DependencyConstraint("react"),),
    capability_probes=("vite:react-refresh",),
    initializer=partial(StaticSiteAdapter, output_dir="dist"),
)

PREACT = FrameworkDescriptor(
    key="preact",
    name="Preact",
    support=SupportLevel.EXPERIMENTAL,
    type=FrameworkType.FRAMEWORK,
    parent="vite",
    dependencies=(DependencyConstraint("preact"),),
    capability_probes=("vite:preact-jsx",),
    initializer=partial(StaticSiteAdapter, output_dir="dist"),
)

SVELTE = FrameworkDescriptor(
    key="svelte",
    name="Svelte",
    support=SupportLevel.EXPERIMENTAL,
    type=FrameworkType.FRAMEWORK,
    parent="vite",
    dependencies=(DependencyConstraint("svelte"),),
    capability_probes=("vite-plugin-svelte",),
    initializer=partial(StaticSiteAdapter, output_dir="dist"),
)

# SvelteKit projects also load the Svelte plugin, so plain Svelte matches at
# the same depth.
SVELTEKIT = FrameworkDescriptor(
    key="sveltekit",
    name="SvelteKit",
    support=SupportLevel.EXPERIMENTAL,
    type=FrameworkType.META_FRAMEWORK,
    parent="vite",
    dependencies=(DependencyConstraint("@sveltejs/kit"),),
    capability_probes=("vite-plugin-svelte",),
    overrides=("svelte",),
    initializer=partial(
        ServerAdapter, output_dir=".svelte-kit/output", public_dir=".svelte-kit/output/client"
    ),
)

LIT = FrameworkDescriptor(
    key="lit",
    name="Lit",
    support=SupportLevel.EXPERIMENTAL,
    type=FrameworkType.FRAMEWORK,
    parent="vite",
    dependencies=(DependencyConstraint("lit"),),
    initializer=partial(StaticSiteAdapter, output_dir="dist"),
)

DESCRIPTORS = (VITE, REACT, PREACT, SVELTE, SVELTEKIT, LIT)
