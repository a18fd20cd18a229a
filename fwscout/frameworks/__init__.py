"""Built-in framework descriptors.

The forest is assembled here, in one place and in a fixed order, so that
what gets registered does not depend on import side effects.
"""

from __future__ import annotations

from fwscout.frameworks import angular, astro, express, nextjs, nuxt, vite
from fwscout.models import FrameworkDescriptor

BUILTIN_DESCRIPTORS: tuple[FrameworkDescriptor, ...] = (
    *express.DESCRIPTORS,
    *vite.DESCRIPTORS,
    *nextjs.DESCRIPTORS,
    *nuxt.DESCRIPTORS,
    *angular.DESCRIPTORS,
    *astro.DESCRIPTORS,
)
