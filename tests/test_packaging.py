import tomllib
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]


def test_installed_packages_match_root_imports():
    data = tomllib.loads((ROOT / "pyproject.toml").read_text(encoding="utf-8"))
    find = data["tool"]["setuptools"]["packages"]["find"]

    assert find["where"] == ["."]
    assert "config" in find["include"]
    assert "src.kpi_system.kpi_system*" in find["include"]
    assert (ROOT / "config" / "__init__.py").is_file()
    assert (ROOT / "src" / "kpi_system" / "kpi_system" / "__init__.py").is_file()
