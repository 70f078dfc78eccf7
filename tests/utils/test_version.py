from importlib.metadata import PackageNotFoundError

from bigml_binding.utils.version import get_version


def _raise(_: str) -> str:
    """Raise as if the package is not installed."""
    raise PackageNotFoundError("missing")


def test_get_version_installed(monkeypatch):
    """Returns the installed distribution version.

    Args:
        monkeypatch: Pytest monkeypatch fixture.
    """
    monkeypatch.setattr("bigml_binding.utils.version.version", lambda _: "1.2.3")
    assert get_version() == "1.2.3"


def test_get_version_from_pyproject(monkeypatch, tmp_path):
    """Falls back to pyproject.toml when the package is not installed.

    Args:
        monkeypatch: Pytest monkeypatch fixture.
        tmp_path: Temporary directory fixture.
    """
    (tmp_path / "pyproject.toml").write_text('[project]\nversion = "9.9.9"\n')
    monkeypatch.setattr("bigml_binding.utils.version.version", _raise)
    monkeypatch.chdir(tmp_path)
    assert get_version() == "9.9.9"


def test_get_version_without_pyproject_returns_unknown(monkeypatch, tmp_path):
    """Returns the default when neither a dist nor a pyproject.toml exists."""
    monkeypatch.setattr("bigml_binding.utils.version.version", _raise)
    monkeypatch.chdir(tmp_path)
    assert get_version() == "0.0.0+unknown"
