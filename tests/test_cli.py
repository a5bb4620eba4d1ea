"""Tests for the command-line interface."""

import pytest
from click.testing import CliRunner

from gql_ktgen.cli import main


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def paths(examples_dir, tmp_path):
    return {
        "schema": str(examples_dir / "schema"),
        "operations": str(examples_dir / "connector"),
        "output": str(tmp_path / "generated"),
    }


class TestGenerateCommand:
    """Tests for `gql-ktgen generate`."""

    def test_generate(self, runner, paths, tmp_path):
        result = runner.invoke(
            main, ["generate", "-s", paths["schema"], "-p", paths["operations"], "-o", paths["output"]]
        )
        assert result.exit_code == 0, result.output
        assert "Done! Generated 4 file(s)" in result.output
        assert "Adding input type" not in result.output
        content = (tmp_path / "generated" / "ListMovies.kt").read_text()
        assert content.startswith("package com.example.connector\n")

    def test_verbose(self, runner, paths):
        result = runner.invoke(
            main,
            ["generate", "-s", paths["schema"], "-p", paths["operations"], "-o", paths["output"], "-v"],
        )
        assert result.exit_code == 0, result.output
        assert "Adding input type to schema: Movie_Data" in result.output
        assert "Generating: InsertMovie.kt" in result.output

    def test_package_and_header(self, runner, paths, tmp_path):
        result = runner.invoke(
            main,
            [
                "generate",
                "-s", paths["schema"],
                "-p", paths["operations"],
                "-o", paths["output"],
                "--package", "com.acme.movies",
                "--header", "// Generated by gql-ktgen",
            ],
        )
        assert result.exit_code == 0, result.output
        content = (tmp_path / "generated" / "GetMovie.kt").read_text()
        assert content.startswith("// Generated by gql-ktgen\n\npackage com.acme.movies\n")

    def test_template_dir(self, runner, paths, tmp_path):
        templates = tmp_path / "templates"
        templates.mkdir()
        (templates / "operation.kt.j2").write_text("// {{ model.operation_name }}\n")
        result = runner.invoke(
            main,
            [
                "generate",
                "-s", paths["schema"],
                "-p", paths["operations"],
                "-o", paths["output"],
                "--template-dir", str(templates),
            ],
        )
        assert result.exit_code == 0, result.output
        assert (tmp_path / "generated" / "GetMovie.kt").read_text() == "// GetMovie\n"

    def test_invalid_operations(self, runner, paths, tmp_path):
        operations = tmp_path / "bad.graphql"
        operations.write_text("query Q { movie { budget } }")
        result = runner.invoke(
            main, ["generate", "-s", paths["schema"], "-p", str(operations), "-o", paths["output"]]
        )
        assert result.exit_code == 1
        assert "Invalid GraphQL operations" in result.output

    def test_exclude_prefix_breaks_references(self, runner, paths):
        result = runner.invoke(
            main,
            [
                "generate",
                "-s", paths["schema"],
                "-p", paths["operations"],
                "-o", paths["output"],
                "--exclude-prefix", "Studio",
            ],
        )
        assert result.exit_code == 1
        assert "Schema is missing type 'Studio'" in result.output

    def test_missing_schema_path(self, runner, paths, tmp_path):
        result = runner.invoke(
            main,
            ["generate", "-s", str(tmp_path / "nope"), "-p", paths["operations"], "-o", paths["output"]],
        )
        assert result.exit_code == 2


class TestAugmentCommand:
    """Tests for `gql-ktgen augment`."""

    def test_report(self, runner, paths):
        result = runner.invoke(main, ["augment", "-s", paths["schema"]])
        assert result.exit_code == 0, result.output
        assert 'Adding query field to type "Studio": movies_as_studio' in result.output
        assert "Adding mutation field to schema: movie_insert" in result.output

    def test_verbose_lists_types(self, runner, paths):
        result = runner.invoke(main, ["augment", "-s", paths["schema"], "-v"])
        assert result.exit_code == 0, result.output
        assert "Input Movie_Data: id, title, releaseYear, rating, studio" in result.output
        assert "Object Studio: id, name, movies_as_studio" in result.output

    def test_invalid_schema(self, runner, tmp_path):
        schema = tmp_path / "schema.graphqls"
        schema.write_text("type Movie @unknown { id: ID! }")
        result = runner.invoke(main, ["augment", "-s", str(schema)])
        assert result.exit_code == 1
        assert "Invalid GraphQL schema" in result.output
