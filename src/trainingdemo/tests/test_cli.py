from typer.testing import CliRunner

from trainingdemo import __version__
from trainingdemo.cli import app

runner = CliRunner()


def test_version():
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_print_schema(monkeypatch):
    monkeypatch.setenv("TRAININGDEMO_FEATURES_ENABLED", "graphql")

    result = runner.invoke(app, ["print-schema"])

    assert result.exit_code == 0
    assert "input PersonPartWhereInput" in result.stdout
    assert "personPart(" in result.stdout


def test_print_schema_without_feature(monkeypatch):
    monkeypatch.setenv("TRAININGDEMO_FEATURES_ENABLED", "")

    result = runner.invoke(app, ["print-schema"])

    assert result.exit_code == 1


def test_init_db(tmp_path):
    url = f"sqlite:///{tmp_path / 'demo.db'}"

    result = runner.invoke(app, ["init-db", "--database-url", url])

    assert result.exit_code == 0
    assert (tmp_path / "demo.db").exists()
