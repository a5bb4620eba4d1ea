"""End-to-end tests for the generation pipeline."""

import os

import pytest

from gql_ktgen.core.errors import DocumentValidationError, SchemaConsistencyError
from gql_ktgen.core.hooks import FilterTypesHook, HookRunner
from gql_ktgen.core.pipeline import CodegenPipeline


@pytest.fixture
def make_pipeline(examples_dir, tmp_path):
    def make(**kwargs):
        options = {
            "schema_path": str(examples_dir / "schema"),
            "operations_path": str(examples_dir / "connector"),
            "output_dir": str(tmp_path / "generated"),
            "kotlin_package": "com.example.movies",
        }
        options.update(kwargs)
        return CodegenPipeline(**options)

    return make


class TestCodegenPipeline:
    """Tests for CodegenPipeline."""

    def test_generates_one_file_per_operation(self, make_pipeline):
        written = make_pipeline().run()
        assert [os.path.basename(p) for p in written] == [
            "DeleteMovie.kt",
            "GetMovie.kt",
            "InsertMovie.kt",
            "ListMovies.kt",
        ]
        for path in written:
            assert os.path.isfile(path)

    def test_generated_content(self, make_pipeline, tmp_path):
        make_pipeline().run()
        content = (tmp_path / "generated" / "GetMovie.kt").read_text()
        assert content.startswith("package com.example.movies\n")
        assert "    public data class Studio(\n      val name: String\n    )" in content

        insert = (tmp_path / "generated" / "InsertMovie.kt").read_text()
        assert "      title: String,\n      releaseYear: Int?\n" in insert

    def test_reports_progress(self, make_pipeline):
        events = []
        make_pipeline(on_event=events.append).run()
        assert 'Adding query field to type "Studio": movies_as_studio' in events
        assert "Adding input type to schema: Movie_Data" in events
        assert "Generating: GetMovie.kt" in events

    def test_silent_without_sink(self, make_pipeline, capsys):
        make_pipeline().run()
        assert capsys.readouterr().out == ""

    def test_pre_hooks_run_before_augmentation(self, make_pipeline):
        hooks = HookRunner()
        hooks.add_pre_hook(FilterTypesHook(exclude_prefix="Studio"))
        with pytest.raises(SchemaConsistencyError, match="Studio"):
            make_pipeline(hooks=hooks).run()

    def test_invalid_operations(self, make_pipeline, tmp_path):
        operations = tmp_path / "bad.graphql"
        operations.write_text("query Q { movie { budget } }")
        with pytest.raises(DocumentValidationError):
            make_pipeline(operations_path=str(operations)).run()

    def test_load_schema(self, make_pipeline):
        pipeline = make_pipeline()
        schema = pipeline.load_schema()
        assert schema.get_type("Movie_Data") is not None
        assert pipeline.schema is schema
