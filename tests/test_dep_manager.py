"""Tests for dependency checks."""

from wlancore import dep_manager
from wlancore.dep_manager import Dependency


def test_check_system_dep(monkeypatch):
    monkeypatch.setattr(dep_manager.shutil, "which",
                        lambda cmd: "/usr/sbin/iw" if cmd == "iw" else None)
    assert dep_manager.check_system_dep(dep_manager.SYSTEM_DEPS[0])
    assert not dep_manager.check_system_dep(
        Dependency("nope", "nope", "", False, ""))


def test_missing_critical(monkeypatch):
    monkeypatch.setattr(dep_manager.shutil, "which", lambda cmd: None)
    assert dep_manager.get_missing_critical() == ["iw", "sudo"]


def test_python_deps_installed():
    status = dep_manager.check_all_python_deps()
    assert status["rich>=13.0"]
    assert not dep_manager.check_python_dep("surely-not-installed-pkg>=1")
