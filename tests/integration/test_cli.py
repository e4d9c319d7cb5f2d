"""
Integration tests for the command line interface.
"""

import json

import pytest
from click.testing import CliRunner

from cssvalues.cli import main


@pytest.fixture
def project(tmp_path):
    styles = tmp_path / "styles"
    (styles / "components").mkdir(parents=True)
    (styles / "colors.css").write_text("@value primary: #f00;\n")
    (styles / "main.css").write_text('@value primary from "./colors.css";\n.a { color: primary; }\n')
    (styles / "components" / "button.css").write_text(
        '@value primary from "../colors.css";\n.button { border-color: primary; }\n'
    )
    return tmp_path


class TestCLI:
    """Test the cssvalues command."""

    def test_single_file_to_stdout(self, project):
        runner = CliRunner()
        result = runner.invoke(main, [str(project / "styles" / "main.css")])
        assert result.exit_code == 0, result.output
        assert '@value primary from "./colors.css";' in result.stdout
        assert ".a { color: #f00; }" in result.stdout

    def test_no_emit_exports(self, project):
        runner = CliRunner()
        result = runner.invoke(main, ["--no-emit-exports", str(project / "styles" / "main.css")])
        assert result.exit_code == 0, result.output
        assert "@value" not in result.stdout
        assert ".a { color: #f00; }" in result.stdout

    def test_directory_requires_out(self, project):
        runner = CliRunner()
        result = runner.invoke(main, [str(project / "styles")])
        assert result.exit_code == 2
        assert "--out" in result.output

    def test_directory_to_out(self, project, tmp_path):
        out = tmp_path / "dist"
        values_out = tmp_path / "values.json"
        runner = CliRunner()
        result = runner.invoke(main, [
            str(project / "styles"),
            "--out", str(out),
            "--values-out", str(values_out),
        ])
        assert result.exit_code == 0, result.output

        assert (out / "components" / "button.css").read_text().endswith(".button { border-color: #f00; }\n")
        assert (out / "main.css").read_text().endswith(".a { color: #f00; }\n")

        data = json.loads(values_out.read_text())
        assert data["metadata"]["total_files"] == 3
        main_entry = data["files"][str(project / "styles" / "main.css")]
        assert main_entry["values"] == {"primary": "#f00"}
        assert len(main_entry["dependencies"]) == 1

    def test_missing_import_fails(self, tmp_path):
        broken = tmp_path / "broken.css"
        broken.write_text('@value a from "./missing.css";\n')
        runner = CliRunner()
        result = runner.invoke(main, [str(broken)])
        assert result.exit_code == 1
        assert "Can't resolve './missing.css'" in result.output

    def test_config_file(self, project, tmp_path):
        config = tmp_path / "cssvalues.yaml"
        config.write_text("noEmitExports: true\n")
        runner = CliRunner()
        result = runner.invoke(main, ["--config", str(config), str(project / "styles" / "main.css")])
        assert result.exit_code == 0, result.output
        assert result.stdout == "\n.a { color: #f00; }\n"

    def test_undecodable_stylesheet_fails(self, tmp_path):
        broken = tmp_path / "latin1.css"
        broken.write_bytes(b"\xff.a { color: red; }\n")
        runner = CliRunner()
        result = runner.invoke(main, [str(broken)])
        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "can't decode" in result.output
