"""Tests for report rendering."""

import json

import fwscout
from fwscout.conflict import select
from fwscout.models import FrameworkDescriptor, MatchRecord, SupportLevel
from fwscout.report import render_json, render_text

VITE = FrameworkDescriptor(key="vite", name="Vite")
REACT = FrameworkDescriptor(key="react", name="React", parent="vite")
EXPRESS = FrameworkDescriptor(key="express", name="Express.js", support=SupportLevel.COMMUNITY)


def _detected():
    return select([MatchRecord(1, VITE), MatchRecord(1, EXPRESS), MatchRecord(2, REACT)])


def _ambiguous():
    return select([MatchRecord(1, VITE), MatchRecord(1, EXPRESS)])


class TestTextOutput:
    def test_detected(self):
        output = render_text(_detected(), "/srv/app", color=False)
        assert "Status:   DETECTED" in output
        assert "Framework: React (react) at depth 2" in output
        assert "experimental integration" in output
        assert "/srv/app" in output

    def test_ambiguous_lists_conflicts(self):
        output = render_text(_ambiguous(), "/srv/app", color=False)
        assert "Multiple conflicting frameworks discovered" in output
        assert "Vite (vite)" in output
        assert "Express.js (express)" in output

    def test_undetected(self):
        output = render_text(select([]), "/srv/app", color=False)
        assert "Could not determine the web framework in use." in output
        assert "Matches" not in output

    def test_color_codes(self):
        assert "\033[92m" in render_text(_detected(), "/srv/app")
        assert "\033[" not in render_text(_detected(), "/srv/app", color=False)


class TestJsonOutput:
    def test_valid_json(self):
        doc = json.loads(render_json(_detected(), "/srv/app"))
        assert doc["tool"] == "fwscout"
        assert doc["version"] == fwscout.__version__
        assert doc["status"] == "detected"
        assert doc["framework"] == {
            "key": "react",
            "name": "React",
            "depth": 2,
            "support": "experimental",
            "type": "framework",
        }

    def test_ambiguous(self):
        doc = json.loads(render_json(_ambiguous(), "/srv/app"))
        assert doc["status"] == "ambiguous"
        assert doc["framework"] is None
        assert [c["key"] for c in doc["conflicts"]] == ["express", "vite"]

    def test_deterministic_order(self):
        """Matches are sorted by depth, then key."""
        doc = json.loads(render_json(_detected(), "/srv/app"))
        assert [(m["depth"], m["key"]) for m in doc["matches"]] == [
            (1, "express"), (1, "vite"), (2, "react"),
        ]
        assert doc["matches"][2]["parent"] == "vite"
