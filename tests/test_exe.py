"""Tests for kiln.exe."""

from __future__ import annotations

import os
import pickle
from collections import Counter
from pathlib import Path

import pytest

from kiln.errors import ExecutableResolutionError
from kiln.exe import resolve_executable_path, which_in
from kiln.system import System


class FakeSystem(System):
    """System double with canned values and call counters."""

    def __init__(
        self,
        *,
        env: dict[str, str] | None = None,
        argv0: str | None = None,
        exe: Path | None = None,
        cwd: Path | None = None,
    ) -> None:
        self.env = env or {}
        self._argv0 = argv0
        self._exe = exe
        self._cwd = cwd or Path("/")
        self.calls: Counter[str] = Counter()

    def getenv(self, name: str) -> str | None:
        self.calls[f"getenv:{name}"] += 1
        return self.env.get(name)

    def argv0(self) -> str | None:
        self.calls["argv0"] += 1
        return self._argv0

    def current_exe(self) -> Path:
        self.calls["current_exe"] += 1
        if self._exe is None:
            raise OSError("/proc is not mounted")
        return self._exe

    def cwd(self) -> Path:
        return self._cwd


def _make_exe(path: Path, executable: bool = True) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("#!/bin/sh\n")
    path.chmod(0o755 if executable else 0o644)
    return path.resolve()


class TestStrategyPrecedence:
    def test_env_wins_over_other_strategies(self, tmp_path):
        from_env = _make_exe(tmp_path / "env" / "kiln")
        from_exe = _make_exe(tmp_path / "exe" / "kiln")
        from_argv = _make_exe(tmp_path / "argv" / "kiln")
        system = FakeSystem(
            env={"KILN": str(from_env)},
            exe=from_exe,
            argv0=str(from_argv),
        )
        assert resolve_executable_path(system, None) == from_env
        assert system.calls["current_exe"] == 0
        assert system.calls["argv0"] == 0

    def test_env_path_is_canonicalized(self, tmp_path):
        real = _make_exe(tmp_path / "real" / "kiln")
        link = tmp_path / "link"
        link.symlink_to(real)
        system = FakeSystem(env={"KILN": str(link)})
        assert resolve_executable_path(system, None) == real

    def test_relative_env_path_uses_system_cwd(self, tmp_path):
        expected = _make_exe(tmp_path / "tools" / "kiln")
        system = FakeSystem(env={"KILN": "tools/kiln"}, cwd=tmp_path)
        assert resolve_executable_path(system, None) == expected

    def test_relative_current_exe_uses_system_cwd(self, tmp_path):
        expected = _make_exe(tmp_path / "dist" / "kiln")
        system = FakeSystem(exe=Path("dist/kiln"), cwd=tmp_path)
        assert resolve_executable_path(system, None) == expected

    def test_missing_env_target_falls_through_to_current_exe(self, tmp_path):
        from_exe = _make_exe(tmp_path / "exe" / "kiln")
        system = FakeSystem(env={"KILN": str(tmp_path / "missing")}, exe=from_exe)
        assert resolve_executable_path(system, None) == from_exe

    def test_current_exe_wins_over_argv(self, tmp_path):
        from_exe = _make_exe(tmp_path / "exe" / "kiln")
        from_argv = _make_exe(tmp_path / "argv" / "kiln")
        system = FakeSystem(exe=from_exe, argv0=str(from_argv))
        assert resolve_executable_path(system, None) == from_exe
        assert system.calls["argv0"] == 0


class TestArgvFallback:
    def test_bare_name_searches_path(self, tmp_path):
        expected = _make_exe(tmp_path / "bin" / "kiln")
        system = FakeSystem(argv0="kiln", cwd=tmp_path)
        search = os.pathsep.join([str(tmp_path / "empty"), str(tmp_path / "bin")])
        assert resolve_executable_path(system, search) == expected
        assert system.calls["current_exe"] == 1

    def test_bare_name_skips_non_executable(self, tmp_path):
        _make_exe(tmp_path / "first" / "kiln", executable=False)
        expected = _make_exe(tmp_path / "second" / "kiln")
        system = FakeSystem(argv0="kiln", cwd=tmp_path)
        search = os.pathsep.join([str(tmp_path / "first"), str(tmp_path / "second")])
        assert resolve_executable_path(system, search) == expected

    def test_relative_path_resolved_against_cwd(self, tmp_path):
        expected = _make_exe(tmp_path / "target" / "debug" / "kiln")
        system = FakeSystem(argv0="./target/debug/kiln", cwd=tmp_path)
        # A multi-component argv[0] never consults the search path
        assert resolve_executable_path(system, "/nonexistent") == expected

    def test_dot_slash_name_resolved_against_cwd(self, tmp_path):
        expected = _make_exe(tmp_path / "proj" / "kiln")
        _make_exe(tmp_path / "bin" / "kiln")
        system = FakeSystem(argv0="./kiln", cwd=tmp_path / "proj")
        assert resolve_executable_path(system, str(tmp_path / "bin")) == expected

    def test_dot_slash_name_never_searched(self, tmp_path):
        _make_exe(tmp_path / "bin" / "kiln")
        (tmp_path / "proj").mkdir()
        system = FakeSystem(argv0="./kiln", cwd=tmp_path / "proj")
        with pytest.raises(ExecutableResolutionError):
            resolve_executable_path(system, str(tmp_path / "bin"))

    def test_absolute_path(self, tmp_path):
        expected = _make_exe(tmp_path / "usr" / "bin" / "kiln")
        system = FakeSystem(argv0=str(expected), cwd=Path("/"))
        assert resolve_executable_path(system, None) == expected

    def test_bare_name_not_resolved_against_cwd(self, tmp_path):
        _make_exe(tmp_path / "kiln")
        system = FakeSystem(argv0="kiln", cwd=tmp_path)
        with pytest.raises(ExecutableResolutionError):
            resolve_executable_path(system, str(tmp_path / "bin"))


class TestTotalFailure:
    def test_all_attempts_are_retained(self, tmp_path):
        system = FakeSystem(argv0="kiln", cwd=tmp_path)
        with pytest.raises(ExecutableResolutionError) as exc_info:
            resolve_executable_path(system, str(tmp_path))

        err = exc_info.value
        assert [a.strategy for a in err.attempts] == ["env", "current_exe", "argv0"]
        assert err.message == "could not get the path to the kiln executable"
        assert isinstance(err.__cause__, FileNotFoundError)

    def test_message_lists_every_cause(self, tmp_path):
        system = FakeSystem(cwd=tmp_path)
        with pytest.raises(ExecutableResolutionError) as exc_info:
            resolve_executable_path(system, None)

        text = str(exc_info.value)
        assert "could not get the path" in text
        assert "$KILN not set" in text
        assert "/proc is not mounted" in text
        assert "no argv[0]" in text


class TestWhichIn:
    def test_relative_search_entry_uses_cwd(self, tmp_path):
        expected = _make_exe(tmp_path / "tools" / "kiln")
        assert which_in("kiln", "tools", tmp_path) == expected

    def test_dot_slash_prefix_is_a_path(self, tmp_path):
        expected = _make_exe(tmp_path / "kiln")
        assert which_in("./kiln", "", tmp_path) == expected

    def test_empty_search_path(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            which_in("kiln", "", tmp_path)

    def test_multi_component_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            which_in("bin/kiln", None, tmp_path)


class TestErrorPickling:
    def test_round_trips_through_pickle(self, tmp_path):
        system = FakeSystem(cwd=tmp_path)
        with pytest.raises(ExecutableResolutionError) as exc_info:
            resolve_executable_path(system, None)

        restored = pickle.loads(pickle.dumps(exc_info.value))
        assert restored.message == exc_info.value.message
        assert [a.strategy for a in restored.attempts] == ["env", "current_exe", "argv0"]
        assert str(restored) == str(exc_info.value)
