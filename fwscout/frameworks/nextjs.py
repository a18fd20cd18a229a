"""Next.js."""

from __future__ import annotations

from functools import partial

from fwscout.adapters.server import ServerAdapter
from fwscout.models import DependencyConstraint, FrameworkDescriptor, FrameworkType, SupportLevel

NEXTJS = FrameworkDescriptor(
    key="nextjs",
    name="Next.js",
    support=SupportLevel.EXPERIMENTAL,
    type=FrameworkType.META_FRAMEWORK,
    dependencies=(DependencyConstraint("next"),),
    overrides=("express",),
    initializer=partial(ServerAdapter, output_dir=".next", public_dir="public"),
)

DESCRIPTORS = (NEXTJS,)
