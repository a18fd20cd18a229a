"""Angular."""

from __future__ import annotations

from functools import partial

from fwscout.adapters.static import StaticSiteAdapter
from fwscout.models import DependencyConstraint, FrameworkDescriptor, FrameworkType, SupportLevel

ANGULAR = FrameworkDescriptor(
    key="angular",
    name="Angular",
    support=SupportLevel.EXPERIMENTAL,
    type=FrameworkType.FRAMEWORK,
    required_files=("angular.json",),
    dependencies=(DependencyConstraint("@angular/core"),),
    overrides=("express",),
    initializer=partial(StaticSiteAdapter, output_dir="dist"),
)

DESCRIPTORS = (ANGULAR,)
