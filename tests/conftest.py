"""Shared fakes for the npm / node probes."""

from __future__ import annotations

import pytest

from fwscout.errors import ProbeFailure
from fwscout.evaluator import PredicateEvaluator
from fwscout.probes.dependencies import InstalledDependency


class FakeDependencyGraph:
    """In-memory installed tree: ``{name: (version, dev, depth)}``."""

    def __init__(self, installed: dict | None = None, fail: bool = False):
        self.installed = installed or {}
        self.fail = fail
        self.calls: list[tuple] = []

    def find(self, name, directory, depth=None, include_dev=True):
        self.calls.append((name, directory, depth, include_dev))
        if self.fail:
            raise ProbeFailure("npm exploded")
        if name not in self.installed:
            return None
        entry = self.installed[name]
        if not isinstance(entry, tuple):
            entry = (entry,)
        # pad to (version, dev, depth)
        version, dev, found_at = entry + (False, 0)[len(entry) - 1 :]
        if dev and not include_dev:
            return None
        if depth is not None and found_at > depth:
            return None
        return InstalledDependency(name=name, version=version)


class FakeConfigProbe:
    """Returns a fixed plugin list, or raises when *plugins* is ``None``."""

    def __init__(self, plugins: list[str] | None):
        self.plugins = plugins
        self.calls = 0

    def active_plugins(self, directory):
        self.calls += 1
        if self.plugins is None:
            raise ProbeFailure("Could not load dependency vite")
        return list(self.plugins)


@pytest.fixture
def make_evaluator():
    """Build a :class:`PredicateEvaluator` over fakes."""

    def _make(registry, installed=None, plugins=(), fail_graph=False):
        graph = FakeDependencyGraph(installed, fail=fail_graph)
        probe = FakeConfigProbe(list(plugins) if plugins is not None else None)
        return PredicateEvaluator(registry, dependency_graph=graph, config_probes={"vite": probe})

    return _make


@pytest.fixture
def project(tmp_path):
    """Create files under a temp project dir: ``project("a.js", "b/c.json")``."""

    def _make(*names: str):
        for name in names:
            path = tmp_path / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text("{}" if name.endswith(".json") else "")
        return str(tmp_path)

    return _make
