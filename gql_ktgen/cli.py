"""Command-line interface for gql-ktgen."""

from pathlib import Path

import click
from graphql import GraphQLError

from .core.errors import CodegenError, DocumentValidationError
from .core.hooks import AddHeaderHook, FilterTypesHook, HookRunner
from .core.pipeline import CodegenPipeline

DEFAULT_KOTLIN_PACKAGE = "com.example.connector"


@click.group()
@click.version_option(package_name="gql-ktgen")
def main():
    """GraphQL schema augmentation and Kotlin SDK generator.

    Generate typed Kotlin operation classes from a GraphQL schema and
    a set of operations.
    """
    pass


@main.command()
@click.option(
    "--schema",
    "-s",
    required=True,
    type=click.Path(exists=True),
    help="Path to GraphQL schema file or directory.",
)
@click.option(
    "--operations",
    "-p",
    required=True,
    type=click.Path(exists=True),
    help="Path to GraphQL operations file or directory.",
)
@click.option(
    "--output",
    "-o",
    required=True,
    type=click.Path(),
    help="Output directory for generated Kotlin files.",
)
@click.option(
    "--package",
    "-k",
    "kotlin_package",
    default=DEFAULT_KOTLIN_PACKAGE,
    show_default=True,
    help="Kotlin package of the generated files.",
)
@click.option(
    "--template-dir",
    type=click.Path(exists=True, file_okay=False),
    default=None,
    help="Directory with templates overriding the built-in ones.",
)
@click.option(
    "--header",
    default=None,
    help="Header added to the top of every generated file.",
)
@click.option(
    "--exclude-prefix",
    default=None,
    help="Drop schema types whose name starts with this prefix.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)
def generate(
    schema: str,
    operations: str,
    output: str,
    kotlin_package: str,
    template_dir: str | None,
    header: str | None,
    exclude_prefix: str | None,
    verbose: bool,
):
    """Generate Kotlin code from a GraphQL schema and operations.

    Examples:

        gql-ktgen generate --schema ./schema --operations ./connector --output ./generated

        gql-ktgen generate -s ./schema.graphqls -p ./queries.graphql -o ./src -k com.acme.movies

        gql-ktgen generate -s ./schema -p ./connector -o ./generated --header "// Generated"
    """
    output_path = Path(output).resolve()

    hooks = HookRunner()
    if exclude_prefix:
        hooks.add_pre_hook(FilterTypesHook(exclude_prefix=exclude_prefix))
    if header:
        hooks.add_post_hook(AddHeaderHook(header))

    if verbose:
        click.echo(f"Schema: {Path(schema).resolve()}")
        click.echo(f"Operations: {Path(operations).resolve()}")
        click.echo(f"Output: {output_path}")

    pipeline = CodegenPipeline(
        schema_path=schema,
        operations_path=operations,
        output_dir=str(output_path),
        kotlin_package=kotlin_package,
        template_dir=template_dir,
        hooks=hooks,
        on_event=click.echo if verbose else None,
    )

    click.echo("Generating code...")
    try:
        written = pipeline.run()
    except (CodegenError, DocumentValidationError, GraphQLError) as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"Done! Generated {len(written)} file(s) in {output_path}")


@main.command()
@click.option(
    "--schema",
    "-s",
    required=True,
    type=click.Path(exists=True),
    help="Path to GraphQL schema file or directory.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)
def augment(schema: str, verbose: bool):
    """Show what augmentation adds to a schema.

    Examples:

        gql-ktgen augment --schema ./schema

        gql-ktgen augment -s ./schema.graphqls -v
    """
    pipeline = CodegenPipeline(
        schema_path=schema,
        operations_path="",
        output_dir="",
        kotlin_package=DEFAULT_KOTLIN_PACKAGE,
        on_event=click.echo,
    )
    try:
        augmented = pipeline.load_schema()
    except (CodegenError, DocumentValidationError, GraphQLError) as e:
        raise click.ClickException(str(e)) from e

    if verbose:
        for type_def in augmented.non_builtin_types():
            click.echo(f"{type_def.kind.value} {type_def.name}: {', '.join(type_def.field_names)}")


if __name__ == "__main__":
    main()
