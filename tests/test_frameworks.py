"""Tests for the built-in framework forest, resolved over fake probes."""

from __future__ import annotations

import pytest

from fwscout.discovery import discover
from fwscout.frameworks import BUILTIN_DESCRIPTORS
from fwscout.models import OutcomeStatus
from fwscout.registry import default_registry


@pytest.fixture
def registry():
    return default_registry()


def _detect(registry, make_evaluator, directory, installed, plugins=()):
    return discover(directory, registry, make_evaluator(registry, installed, plugins))


class TestBuiltinForest:
    def test_keys_unique(self):
        keys = [d.key for d in BUILTIN_DESCRIPTORS]
        assert len(keys) == len(set(keys))

    def test_every_descriptor_has_an_initializer(self):
        assert all(d.initializer is not None for d in BUILTIN_DESCRIPTORS)

    def test_vite_children(self, registry):
        assert {d.key for d in registry.children_of("vite")} == {
            "react", "preact", "svelte", "sveltekit", "lit",
        }


class TestBuiltinDetection:
    def test_react_on_vite(self, registry, make_evaluator, tmp_path):
        outcome = _detect(
            registry, make_evaluator, str(tmp_path),
            {"vite": "4.1.0", "react": "18.2.0"}, ["vite:react-refresh"],
        )
        assert outcome.descriptor.key == "react"
        assert outcome.depth == 2

    def test_bare_vite(self, registry, make_evaluator, tmp_path):
        outcome = _detect(registry, make_evaluator, str(tmp_path), {"vite": "4.1.0"})
        assert outcome.descriptor.key == "vite"

    def test_sveltekit_overrides_svelte(self, registry, make_evaluator, tmp_path):
        outcome = _detect(
            registry, make_evaluator, str(tmp_path),
            {"vite": "4.1.0", "svelte": "3.55.0", "@sveltejs/kit": "1.5.0"},
            ["vite-plugin-svelte"],
        )
        assert outcome.status is OutcomeStatus.DETECTED
        assert outcome.descriptor.key == "sveltekit"

    def test_nextjs_overrides_express(self, registry, make_evaluator, project):
        directory = project("package.json")
        outcome = _detect(registry, make_evaluator, directory, {"next": "13.1.0", "express": "4.18.2"})
        assert outcome.descriptor.key == "nextjs"

    def test_nuxt_versions(self, registry, make_evaluator, tmp_path):
        three = _detect(registry, make_evaluator, str(tmp_path), {"nuxt": "3.2.0"})
        two = _detect(registry, make_evaluator, str(tmp_path), {"nuxt": "2.15.8"})
        assert three.descriptor.key == "nuxt"
        assert two.descriptor.key == "nuxt2"

    def test_angular_needs_workspace_file(self, registry, make_evaluator, project, tmp_path):
        assert not _detect(registry, make_evaluator, str(tmp_path), {"@angular/core": "15.0.0"}).detected
        directory = project("angular.json")
        outcome = _detect(registry, make_evaluator, directory, {"@angular/core": "15.0.0"})
        assert outcome.descriptor.key == "angular"

    def test_astro_overrides_vite(self, registry, make_evaluator, project):
        directory = project("astro.config.mjs")
        outcome = _detect(registry, make_evaluator, directory, {"astro": "2.0.0", "vite": "4.1.0"})
        assert outcome.descriptor.key == "astro"

    def test_next_and_nuxt_together_are_ambiguous(self, registry, make_evaluator, tmp_path):
        outcome = _detect(registry, make_evaluator, str(tmp_path), {"next": "13.1.0", "nuxt": "3.2.0"})
        assert outcome.status is OutcomeStatus.AMBIGUOUS
        assert [d.key for d in outcome.conflicts] == ["nextjs", "nuxt"]
