from pathlib import Path

import pytest
from typer import Exit

from toml_example.utils.config import ExampleTarget, Settings, get_config_file, read_config
from toml_example.utils.normalizers import normalize_bool, normalize_path, normalize_target


def write_pyproject(project_dir: Path, body: str) -> Path:
    path = project_dir / "pyproject.toml"
    path.write_text('[project]\nname = "demo"\n\n' + body, encoding="utf-8")
    return path


def test_get_config_file_defaults_to_cwd(project_dir):
    assert get_config_file() == Path.cwd() / "pyproject.toml"
    assert get_config_file(Path("elsewhere")) == Path("elsewhere") / "pyproject.toml"


def test_read_config(project_dir):
    write_pyproject(
        project_dir,
        "[tool.toml-example]\n"
        'targets = ["app.settings:Config", "app.settings:Node = docs/node.toml"]\n'
        'output_dir = "examples"\n'
        'app_dir = "src"\n'
        'check = "no"\n',
    )

    settings = read_config()
    base = Path.cwd()

    assert settings.targets == [
        ExampleTarget("app.settings", "Config"),
        ExampleTarget("app.settings", "Node", Path("docs/node.toml")),
    ]
    assert settings.output_dir == base / "examples"
    assert settings.app_dir == base / "src"
    assert settings.check is False
    assert settings.source == base / "pyproject.toml"


def test_missing_table_uses_defaults(project_dir, capsys):
    write_pyproject(project_dir, "")

    settings = read_config()
    base = Path.cwd()

    assert settings == Settings(
        output_dir=base,
        app_dir=base,
        source=base / "pyproject.toml",
    )
    assert "No [tool.toml-example] table" in capsys.readouterr().out


def test_unknown_keys_warn(project_dir, capsys):
    write_pyproject(project_dir, "[tool.toml-example]\nverbose = true\n")

    read_config()

    assert "Unknown setting 'verbose'" in capsys.readouterr().out


def test_missing_file_exits(project_dir):
    with pytest.raises(Exit) as exc:
        read_config()
    assert exc.value.exit_code == 1


def test_invalid_toml_exits(project_dir):
    (project_dir / "pyproject.toml").write_text("[tool\n", encoding="utf-8")
    with pytest.raises(Exit):
        read_config()


@pytest.mark.parametrize(
    "body",
    [
        'targets = "app:Config"\n',
        'targets = ["app"]\n',
        'check = "maybe"\n',
        'output_dir = ["a", "b"]\n',
        'output_dir = ""\n',
    ],
)
def test_invalid_values_exit(project_dir, body):
    write_pyproject(project_dir, "[tool.toml-example]\n" + body)
    with pytest.raises(Exit):
        read_config()


def test_target_output_path():
    target = ExampleTarget.parse("app.settings:Outer.ServerConfig")
    assert target.output_path(Path("out")) == Path("out") / "server-config.example.toml"

    target = ExampleTarget.parse("app.settings:Config=conf/app.toml")
    assert target.output_path(Path("out")) == Path("out") / "conf" / "app.toml"
    assert str(target) == "app.settings:Config"


def test_target_load(write_module, project_dir):
    write_module(
        "target_module",
        "class Outer:\n    class Inner:\n        pass\n",
    )
    target = ExampleTarget.parse("target_module:Outer.Inner")
    assert target.load(project_dir).__name__ == "Inner"

    with pytest.raises(AttributeError):
        ExampleTarget.parse("target_module:Missing").load(project_dir)


def test_normalizers():
    assert normalize_bool("Yes") is True
    assert normalize_bool(False) is False
    assert normalize_path(" a/b ") == "a/b"
    assert normalize_target(" app : Config = out.toml ") == "app:Config=out.toml"

    with pytest.raises(ValueError):
        normalize_bool("perhaps")
    with pytest.raises(ValueError):
        normalize_target("Config")
