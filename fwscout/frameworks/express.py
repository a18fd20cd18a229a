"""Express — a plain Node server, the least specific backend."""

from __future__ import annotations

from functools import partial

from fwscout.adapters.server import ServerAdapter
from fwscout.models import DependencyConstraint, FrameworkDescriptor, FrameworkType, SupportLevel

EXPRESS = FrameworkDescriptor(
    key="express",
    name="Express.js",
    support=SupportLevel.EXPERIMENTAL,
    type=FrameworkType.CUSTOM,
    required_files=("package.json",),
    dependencies=(DependencyConstraint("express"),),
    initializer=partial(ServerAdapter, output_dir=None, public_dir="public"),
)

DESCRIPTORS = (EXPRESS,)
