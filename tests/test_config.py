"""Tests for config loading, merging, and logging."""

import json
import os
import stat

import pytest

from cmdsig.core.config import (
    Config,
    _find_project_config,
    _merge_configs,
    configure_logging,
    load_config,
    log_signature,
    parse_config,
)
from cmdsig.cmdsig import get_command


class TestFindProjectConfig:
    """Test walking up to find .cmdsig."""

    def test_finds_in_cwd(self, tmp_path):
        (tmp_path / ".cmdsig").write_text("command deploy")
        assert _find_project_config(tmp_path) == tmp_path / ".cmdsig"

    def test_finds_in_parent(self, tmp_path):
        (tmp_path / ".cmdsig").write_text("command deploy")
        child = tmp_path / "src" / "deep"
        child.mkdir(parents=True)
        assert _find_project_config(child) == tmp_path / ".cmdsig"

    def test_stops_at_first(self, tmp_path):
        (tmp_path / ".cmdsig").write_text("root")
        child = tmp_path / "project"
        child.mkdir()
        (child / ".cmdsig").write_text("project")
        assert _find_project_config(child) == child / ".cmdsig"

    def test_not_found(self, tmp_path):
        child = tmp_path / "no" / "config" / "here"
        child.mkdir(parents=True)
        assert _find_project_config(child) is None

    def test_ignores_directory(self, tmp_path):
        (tmp_path / ".cmdsig").mkdir()
        assert _find_project_config(tmp_path) is None


class TestMergeConfigs:
    """Test config merging logic."""

    def test_commands_concatenate(self):
        merged = _merge_configs(Config(commands=["a"]), Config(commands=["b"]))
        assert merged.commands == ["a", "b"]

    def test_management_actions_accumulate(self):
        base = Config(management={"app": ["install"]})
        overlay = Config(management={"app": ["remove"], "kit": ["build"]})
        merged = _merge_configs(base, overlay)
        assert merged.management == {"app": ["install", "remove"], "kit": ["build"]}

    def test_settings_overlay_wins(self, tmp_path):
        base = Config(log=tmp_path / "a.log")
        overlay = Config(log=tmp_path / "b.log", disabled=True)
        merged = _merge_configs(base, overlay)
        assert merged.log == tmp_path / "b.log"
        assert merged.disabled

    def test_unset_overlay_keeps_base(self, tmp_path):
        base = Config(log=tmp_path / "a.log", log_full=True)
        merged = _merge_configs(base, Config())
        assert merged.log == tmp_path / "a.log"
        assert merged.log_full

    def test_merge_does_not_mutate(self):
        base = Config(management={"app": ["install"]})
        _merge_configs(base, Config(management={"app": ["remove"]}))
        assert base.management == {"app": ["install"]}


class TestLoadConfig:
    """Test full config loading from files."""

    @pytest.fixture(autouse=True)
    def isolate(self, tmp_path, monkeypatch):
        monkeypatch.setattr("cmdsig.core.config.USER_CONFIG", tmp_path / "nonexistent")
        monkeypatch.delenv("CMDSIG_CONFIG", raising=False)

    def test_loads_user_config(self, tmp_path, monkeypatch):
        user_cfg = tmp_path / "user" / "config"
        user_cfg.parent.mkdir()
        user_cfg.write_text("command deploy")
        monkeypatch.setattr("cmdsig.core.config.USER_CONFIG", user_cfg)

        config = load_config(tmp_path)
        assert config.commands == ["deploy"]

    def test_loads_project_config(self, tmp_path):
        proj = tmp_path / "project"
        proj.mkdir()
        (proj / ".cmdsig").write_text("management app install remove")

        config = load_config(proj)
        assert config.management == {"app": ["install", "remove"]}

    def test_loads_env_config(self, tmp_path, monkeypatch):
        env_cfg = tmp_path / "env.cfg"
        env_cfg.write_text("set disabled")
        monkeypatch.setenv("CMDSIG_CONFIG", str(env_cfg))

        config = load_config(tmp_path)
        assert config.disabled

    def test_scope_order_is_user_project_env(self, tmp_path, monkeypatch):
        user_cfg = tmp_path / "user.cfg"
        user_cfg.write_text("command one\nset log /tmp/user.log")
        monkeypatch.setattr("cmdsig.core.config.USER_CONFIG", user_cfg)
        proj = tmp_path / "project"
        proj.mkdir()
        (proj / ".cmdsig").write_text("command two\nset log /tmp/project.log")
        env_cfg = tmp_path / "env.cfg"
        env_cfg.write_text("command three")
        monkeypatch.setenv("CMDSIG_CONFIG", str(env_cfg))

        config = load_config(proj)
        assert config.commands == ["one", "two", "three"]
        assert str(config.log) == "/tmp/project.log"

    def test_empty_when_no_configs(self, tmp_path):
        config = load_config(tmp_path)
        assert config == Config()

    def test_env_config_tilde_expansion(self, tmp_path, monkeypatch):
        fake_home = tmp_path / "fakehome"
        fake_home.mkdir()
        (fake_home / "my.cfg").write_text("command tilde")
        monkeypatch.setenv("HOME", str(fake_home))
        monkeypatch.setenv("CMDSIG_CONFIG", "~/my.cfg")

        config = load_config(tmp_path)
        assert config.commands == ["tilde"]

    def test_env_config_missing_file_ignored(self, tmp_path, monkeypatch):
        monkeypatch.setenv("CMDSIG_CONFIG", str(tmp_path / "does_not_exist.cfg"))
        assert load_config(tmp_path) == Config()

    def test_parse_error_propagates(self, tmp_path, monkeypatch):
        user_cfg = tmp_path / "user.cfg"
        user_cfg.write_text("invalid config")
        monkeypatch.setattr("cmdsig.core.config.USER_CONFIG", user_cfg)

        with pytest.raises(ValueError, match="line 1: unknown directive 'invalid'"):
            load_config(tmp_path)

    @pytest.mark.skipif(os.name == "nt" or os.geteuid() == 0, reason="Unix permissions, non-root")
    def test_unreadable_user_config(self, tmp_path, monkeypatch):
        user_cfg = tmp_path / "user.cfg"
        user_cfg.write_text("command deploy")
        user_cfg.chmod(0o000)
        monkeypatch.setattr("cmdsig.core.config.USER_CONFIG", user_cfg)

        try:
            with pytest.raises(PermissionError):
                load_config(tmp_path)
        finally:
            user_cfg.chmod(stat.S_IRUSR | stat.S_IWUSR)


class TestParseConfig:
    """Test config syntax."""

    def test_comments_and_blank_lines(self):
        config = parse_config("# vocabulary\n\n  command deploy  \n")
        assert config.commands == ["deploy"]

    def test_multiple_commands_per_line(self):
        assert parse_config("command deploy rollout").commands == ["deploy", "rollout"]

    def test_management(self):
        config = parse_config("management app install\nmanagement app remove")
        assert config.management == {"app": ["install", "remove"]}

    def test_settings(self, tmp_path):
        config = parse_config(f"set log {tmp_path}/cmdsig.log\nset log-full\nset disabled")
        assert config.log == tmp_path / "cmdsig.log"
        assert config.log_full
        assert config.disabled

    def test_log_tilde_expansion(self, monkeypatch, tmp_path):
        monkeypatch.setenv("HOME", str(tmp_path))
        assert parse_config("set log ~/x.log").log == tmp_path / "x.log"

    @pytest.mark.parametrize(
        "text,message",
        [
            ("frobnicate", "line 1: unknown directive 'frobnicate'"),
            ("command", "line 1: requires at least one word"),
            ("\nmanagement app", "line 2: requires a noun and at least one action"),
            ("command --debug", "line 1: '--debug' is not a command word"),
            ("management app --x", "line 1: '--x' is not a command word"),
            ("command a=b", "line 1: 'a=b' is not a command word"),
            ("set", "line 1: 'set' requires a setting name"),
            ("set log", "line 1: 'log' requires a path"),
            ("set disabled yes", "line 1: 'disabled' takes no value"),
            ("set verbose", "line 1: unknown setting 'verbose'"),
        ],
    )
    def test_errors(self, text, message):
        with pytest.raises(ValueError) as exc:
            parse_config(text)
        assert str(exc.value) == message


class TestConfiguredVocabulary:
    """Configured words become reportable."""

    def test_default_vocabulary_when_empty(self, classify):
        assert classify(["deploy"]) == ""

    def test_extra_command(self, classify):
        config = parse_config("command deploy")
        assert classify(["deploy", "prod-cluster"], config=config) == "deploy"

    def test_extra_management(self, classify):
        config = parse_config("management app install")
        assert classify(["app", "install", "my-app"], config=config) == "app install"
        assert classify(["app", "remove"], config=config) == "app"

    def test_extra_action_on_builtin_noun(self, classify):
        config = parse_config("management image frob")
        assert classify(["image", "frob"], config=config) == "image frob"
        assert classify(["image", "ls"], config=config) == "image ls"

    def test_disabled(self, root_flags):
        assert get_command(["image", "ls"], root_flags, Config(disabled=True)) == ""


class TestLogging:
    """Test structured logging."""

    def test_no_logging_when_disabled(self, tmp_path):
        configure_logging(Config(log=None))
        log_signature("run")
        assert not list(tmp_path.glob("*.log"))

    def test_logs_to_file(self, tmp_path):
        log_path = tmp_path / "cmdsig.log"
        configure_logging(Config(log=log_path))

        log_signature("image", reason="unknown flag --test")

        line = json.loads(log_path.read_text().strip())
        assert line["command"] == "image"
        assert line["reason"] == "unknown flag --test"
        assert line["event"] == "classified"
        assert "ts" in line

    def test_log_full_includes_args(self, tmp_path):
        log_path = tmp_path / "cmdsig.log"
        configure_logging(Config(log=log_path, log_full=True))

        log_signature("create", args=["create", "my-container"])

        line = json.loads(log_path.read_text().strip())
        assert line["args"] == ["create", "my-container"]

    def test_log_without_full_excludes_args(self, tmp_path):
        log_path = tmp_path / "cmdsig.log"
        configure_logging(Config(log=log_path))

        log_signature("create", args=["create", "my-container"])

        line = json.loads(log_path.read_text().strip())
        assert "args" not in line
        assert "my-container" not in log_path.read_text()

    def test_creates_log_directory(self, tmp_path):
        log_path = tmp_path / "nested" / "dir" / "cmdsig.log"
        configure_logging(Config(log=log_path))

        log_signature("run")

        assert log_path.exists()

    def test_appends_to_log(self, tmp_path):
        log_path = tmp_path / "cmdsig.log"
        configure_logging(Config(log=log_path))

        log_signature("run")
        log_signature("", reason="no command")

        lines = log_path.read_text().strip().split("\n")
        assert len(lines) == 2

    def test_get_command_logs(self, tmp_path, root_flags):
        log_path = tmp_path / "cmdsig.log"
        config = Config(log=log_path)
        configure_logging(config)

        assert get_command(["login", "registry.example.com"], root_flags, config) == "login"

        line = json.loads(log_path.read_text().strip())
        assert line["command"] == "login"
        assert line["reason"] == "registry login"
        assert "registry.example.com" not in log_path.read_text()
