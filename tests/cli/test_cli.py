"""Tests for the normalize1nf CLI."""

import yaml
from typer.testing import CliRunner

from normalize1nf.cli.main import app


runner = CliRunner()


class TestVersionCommand:
    def test_version(self):
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert "normalize1nf version:" in result.stdout
        assert "Python version:" in result.stdout


class TestInspectCommand:
    def test_lists_non_1nf_columns(self, structure_file):
        result = runner.invoke(app, ["inspect", str(structure_file)])

        assert result.exit_code == 0
        assert "tags" in result.stdout
        assert "meta" in result.stdout
        assert "labels" in result.stdout
        assert "without primary key" in result.stdout

    def test_missing_structure_file(self, tmp_path):
        result = runner.invoke(app, ["inspect", str(tmp_path / "missing.yml")])
        assert result.exit_code == 1
        assert "Could not load structure file" in result.stdout


class TestNormalizeCommand:
    def test_writes_configuration(self, structure_file, tmp_path):
        output = tmp_path / "config.yml"

        result = runner.invoke(app, ["normalize", str(structure_file), "--file", str(output)])

        assert result.exit_code == 0
        assert "t__tags" in result.stdout
        assert "has no primary key" in result.stdout
        data = yaml.safe_load(output.read_text())
        views = data["schemas"]["s"]["customViews"]
        assert {v["name"] for v in views} == {"t__tags", "t__meta"}

    def test_no_sql_quotes_and_patterns(self, structure_file, tmp_path):
        output = tmp_path / "config.yml"

        result = runner.invoke(
            app,
            [
                "normalize",
                str(structure_file),
                "-f",
                str(output),
                "--no-sql-quotes",
                "--pattern-array-description",
                "Items of ${table}.${column}",
                "--pattern-json-name",
                "${table}_${column}_json",
            ],
        )

        assert result.exit_code == 0
        data = yaml.safe_load(output.read_text())
        views = {v["name"]: v for v in data["schemas"]["s"]["customViews"]}
        assert views["t__tags"]["description"] == "Items of t.tags"
        assert views["t__tags"]["query"].startswith("select id as t_id, array_index")
        assert views["t_meta_json"]["query"] == "select id as t_id from s.t"

    def test_unreadable_merge_file(self, structure_file, tmp_path):
        output = tmp_path / "config.yml"

        result = runner.invoke(
            app,
            [
                "normalize",
                str(structure_file),
                "-f",
                str(output),
                "--merge-file",
                str(tmp_path / "missing.yml"),
            ],
        )

        assert result.exit_code == 1
        assert "Could not load configuration file" in result.stdout
        assert not output.exists()
