from users_api.utils.logging import get_project_name, get_project_version, get_pyproject_value


def test_reads_nearest_pyproject(tmp_path):
    (tmp_path / "pyproject.toml").write_text('[project]\nname = "demo"\nversion = "0.3.1"\n')
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)

    assert get_project_name(start=nested) == "demo"
    assert get_pyproject_value("project.version", start=nested) == "0.3.1"


def test_missing_key_returns_default(tmp_path):
    (tmp_path / "pyproject.toml").write_text('[project]\nname = "demo"\n')
    assert get_pyproject_value("tool.nothing", start=tmp_path, default="fallback") == "fallback"


def test_unreadable_pyproject_returns_default(tmp_path):
    (tmp_path / "pyproject.toml").write_text("not = [valid")
    assert get_project_name(start=tmp_path, default="x") == "x"


def test_version_falls_back_to_pyproject(tmp_path):
    (tmp_path / "pyproject.toml").write_text('[project]\nversion = "9.9.9"\n')
    assert get_project_version(start=tmp_path, distribution="no-such-distribution-xyz") == "9.9.9"
