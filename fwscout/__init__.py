"""fwscout — web framework discovery for build orchestrators."""

__version__ = "0.1.0"
