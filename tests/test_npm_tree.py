"""
Tests for the npm tree resolver: parsing, failures, tree files.
"""

import json
import subprocess
from pathlib import Path

import pytest

from sillydeps.core.errors import ResolvedTreeUnavailable
from sillydeps.core.services import npm_tree
from sillydeps.core.services.npm_tree import NpmTreeResolver, load_tree_file, parse_tree


def _completed(stdout: str, returncode: int = 0, stderr: str = "") -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(args=["npm"], returncode=returncode, stdout=stdout, stderr=stderr)


@pytest.fixture
def npm_on_path(monkeypatch):
    monkeypatch.setattr(npm_tree.shutil, "which", lambda cmd: f"/usr/bin/{cmd}")


class TestParseTree:
    def test_object(self):
        assert parse_tree('{"dependencies": {}}') == {"dependencies": {}}

    @pytest.mark.parametrize("output", ["", "   \n", "not json", "[1, 2]", "null"])
    def test_unusable(self, output):
        with pytest.raises(ResolvedTreeUnavailable):
            parse_tree(output)


class TestNpmTreeResolver:
    def test_resolve(self, tmp_path: Path, npm_on_path, monkeypatch, scenario_tree):
        calls = []

        def fake_run(args, **kwargs):
            calls.append((args, kwargs))
            return _completed(json.dumps(scenario_tree))

        monkeypatch.setattr(npm_tree.subprocess, "run", fake_run)
        tree = NpmTreeResolver(timeout=30).resolve(tmp_path)

        assert tree == scenario_tree
        args, kwargs = calls[0]
        assert args == ["npm", "ls", "--json", "--all", "--silent"]
        assert kwargs["cwd"] == str(tmp_path)
        assert kwargs["timeout"] == 30

    def test_nonzero_exit_with_tree_is_accepted(self, tmp_path, npm_on_path, monkeypatch):
        monkeypatch.setattr(
            npm_tree.subprocess, "run",
            lambda args, **kw: _completed('{"dependencies": {"a": {}}}', returncode=1, stderr="ERR! missing"),
        )
        assert NpmTreeResolver().resolve(tmp_path) == {"dependencies": {"a": {}}}

    def test_nonzero_exit_without_output(self, tmp_path, npm_on_path, monkeypatch):
        monkeypatch.setattr(
            npm_tree.subprocess, "run",
            lambda args, **kw: _completed("", returncode=1, stderr="ERR!"),
        )
        with pytest.raises(ResolvedTreeUnavailable, match="no output"):
            NpmTreeResolver().resolve(tmp_path)

    def test_timeout(self, tmp_path, npm_on_path, monkeypatch):
        def fake_run(args, **kwargs):
            raise subprocess.TimeoutExpired(cmd=args, timeout=kwargs["timeout"])

        monkeypatch.setattr(npm_tree.subprocess, "run", fake_run)
        with pytest.raises(ResolvedTreeUnavailable, match="timed out after 5s"):
            NpmTreeResolver(timeout=5).resolve(tmp_path)

    def test_os_error(self, tmp_path, npm_on_path, monkeypatch):
        def fake_run(args, **kwargs):
            raise PermissionError("denied")

        monkeypatch.setattr(npm_tree.subprocess, "run", fake_run)
        with pytest.raises(ResolvedTreeUnavailable, match="Cannot run"):
            NpmTreeResolver().resolve(tmp_path)

    def test_npm_missing(self, tmp_path, monkeypatch):
        monkeypatch.setattr(npm_tree.shutil, "which", lambda cmd: None)
        resolver = NpmTreeResolver(npm_command="definitely-not-npm")
        assert not resolver.is_available()
        with pytest.raises(ResolvedTreeUnavailable, match="not found on PATH"):
            resolver.resolve(tmp_path)


class TestLoadTreeFile:
    def test_load(self, tmp_path: Path, scenario_tree):
        path = tmp_path / "tree.json"
        path.write_text(json.dumps(scenario_tree))
        assert load_tree_file(path) == scenario_tree

    def test_missing(self, tmp_path: Path):
        with pytest.raises(ResolvedTreeUnavailable, match="Cannot read"):
            load_tree_file(tmp_path / "tree.json")

    def test_malformed(self, tmp_path: Path):
        path = tmp_path / "tree.json"
        path.write_text("oops")
        with pytest.raises(ResolvedTreeUnavailable, match="not valid JSON"):
            load_tree_file(path)
