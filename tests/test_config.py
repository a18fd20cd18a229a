"""Tests for the unified config loader (.fwscout.yml)."""

import pytest

import fwscout.config as config_mod
from fwscout.config import DEFAULT_PROBE_TIMEOUT, load_config
from fwscout.resolver import DEFAULT_MAX_DEPTH


@pytest.fixture(autouse=True)
def isolated_user_config(tmp_path, monkeypatch):
    """Point the user-level config at a temp file that does not exist yet."""
    path = tmp_path / "home" / ".fwscout" / "config.yml"
    monkeypatch.setattr(config_mod, "USER_CONFIG_PATH", path)
    return path


@pytest.fixture
def repo(tmp_path):
    root = tmp_path / "repo"
    (root / ".git").mkdir(parents=True)
    return root


class TestDefaultConfig:
    def test_no_config_file_returns_defaults(self, repo):
        cfg = load_config(str(repo))
        assert cfg.discovery.node_command == "node"
        assert cfg.discovery.max_depth == DEFAULT_MAX_DEPTH
        assert cfg.discovery.probe_timeout == DEFAULT_PROBE_TIMEOUT
        assert cfg.discovery.disabled == []
        assert cfg.discovery.frameworks == []
        assert cfg.build.output_dir == ".fwscout"
        assert cfg.project_config_path is None
        assert cfg.user_config_path is None


class TestProjectConfig:
    def test_loads_full_config(self, repo):
        config = repo / ".fwscout.yml"
        config.write_text("""\
discovery:
  npm_command: pnpm
  node_command: /opt/node/bin/node
  max_depth: 8
  probe_timeout: 30
  disabled:
    - express
  frameworks:
    - my_pkg.frameworks:DESCRIPTORS
build:
  output_dir: out
""")
        cfg = load_config(str(repo))
        assert cfg.discovery.npm_command == "pnpm"
        assert cfg.discovery.node_command == "/opt/node/bin/node"
        assert cfg.discovery.max_depth == 8
        assert cfg.discovery.probe_timeout == 30.0
        assert cfg.discovery.disabled == ["express"]
        assert cfg.discovery.frameworks == ["my_pkg.frameworks:DESCRIPTORS"]
        assert cfg.build.output_dir == "out"
        assert cfg.project_config_path == str(config)

    def test_single_string_becomes_list(self, repo):
        (repo / ".fwscout.yml").write_text("discovery:\n  disabled: express\n")
        cfg = load_config(str(repo))
        assert cfg.discovery.disabled == ["express"]

    def test_empty_file_returns_defaults(self, repo):
        (repo / ".fwscout.yml").write_text("")
        cfg = load_config(str(repo))
        assert cfg.discovery.max_depth == DEFAULT_MAX_DEPTH

    def test_malformed_yaml_returns_defaults(self, repo):
        (repo / ".fwscout.yml").write_text(": : invalid yaml [[[")
        cfg = load_config(str(repo))
        assert cfg.discovery.disabled == []

    def test_bad_values_fall_back(self, repo):
        (repo / ".fwscout.yml").write_text("discovery:\n  max_depth: deep\n  probe_timeout: soon\n")
        cfg = load_config(str(repo))
        assert cfg.discovery.max_depth == DEFAULT_MAX_DEPTH
        assert cfg.discovery.probe_timeout == DEFAULT_PROBE_TIMEOUT

    @pytest.mark.parametrize("value", ["0", "-3"])
    def test_max_depth_below_one_falls_back(self, repo, value):
        (repo / ".fwscout.yml").write_text(f"discovery:\n  max_depth: {value}\n")
        assert load_config(str(repo)).discovery.max_depth == DEFAULT_MAX_DEPTH

    @pytest.mark.parametrize("value", ["0", "null", "none"])
    def test_timeout_can_be_disabled(self, repo, value):
        (repo / ".fwscout.yml").write_text(f"discovery:\n  probe_timeout: {value}\n")
        assert load_config(str(repo)).discovery.probe_timeout is None

    def test_walks_up_to_find_config(self, repo):
        """Config in the repo root is found when scanning a subdirectory."""
        (repo / ".fwscout.yml").write_text("discovery:\n  max_depth: 4\n")
        subdir = repo / "packages" / "web"
        subdir.mkdir(parents=True)
        cfg = load_config(str(subdir))
        assert cfg.discovery.max_depth == 4

    def test_stops_at_git_root(self, tmp_path, repo):
        (tmp_path / ".fwscout.yml").write_text("discovery:\n  max_depth: 4\n")
        cfg = load_config(str(repo))
        assert cfg.discovery.max_depth == DEFAULT_MAX_DEPTH


class TestUserConfig:
    def test_user_config_applies(self, repo, isolated_user_config):
        isolated_user_config.parent.mkdir(parents=True)
        isolated_user_config.write_text("discovery:\n  npm_command: yarn\n")
        cfg = load_config(str(repo))
        assert cfg.discovery.npm_command == "yarn"
        assert cfg.user_config_path == str(isolated_user_config)

    def test_project_overrides_user(self, repo, isolated_user_config):
        isolated_user_config.parent.mkdir(parents=True)
        isolated_user_config.write_text(
            "discovery:\n  npm_command: yarn\n  disabled: [lit, preact]\n"
        )
        (repo / ".fwscout.yml").write_text("discovery:\n  disabled: [express]\n")
        cfg = load_config(str(repo))
        # untouched keys survive, lists are replaced
        assert cfg.discovery.npm_command == "yarn"
        assert cfg.discovery.disabled == ["express"]


class TestExplicitConfig:
    def test_only_explicit_file_is_read(self, tmp_path, repo, isolated_user_config):
        isolated_user_config.parent.mkdir(parents=True)
        isolated_user_config.write_text("discovery:\n  npm_command: yarn\n")
        (repo / ".fwscout.yml").write_text("discovery:\n  max_depth: 4\n")
        explicit = tmp_path / "ci.yml"
        explicit.write_text("build:\n  output_dir: ci-out\n")

        cfg = load_config(str(repo), config_path=explicit)
        assert cfg.build.output_dir == "ci-out"
        assert cfg.discovery.max_depth == DEFAULT_MAX_DEPTH
        assert cfg.discovery.npm_command != "yarn"
        assert cfg.project_config_path == str(explicit)

    def test_missing_explicit_file(self, tmp_path):
        cfg = load_config(config_path=tmp_path / "nope.yml")
        assert cfg.build.output_dir == ".fwscout"
