"""Generation hooks for customizing code generation.

Provides protocols for pre- and post-generation hooks that can modify
the schema before augmentation or transform the generated code after.

Example usage:
    from gql_ktgen.core.hooks import PreGenerateHook, PostGenerateHook

    # Pre-generation hook to drop internal types
    class DropInternalTypes(PreGenerateHook):
        def pre_generate(self, schema):
            for name in [n for n in schema.types if n.startswith("_")]:
                del schema.types[name]
            return schema

    # Post-generation hook to add headers
    class AddLicenseHeader(PostGenerateHook):
        def post_generate(self, filename, content):
            header = "// Copyright 2024 My Company\\n\\n"
            return header + content
"""

from typing import Protocol, runtime_checkable

from .ir import Schema


@runtime_checkable
class PreGenerateHook(Protocol):
    """Protocol for pre-generation hooks.

    Pre-generation hooks receive the parsed schema before augmentation
    and can modify it. The returned schema is the one that gets augmented.
    """

    def pre_generate(self, schema: Schema) -> Schema:
        """Called before augmentation.

        Args:
            schema: The parsed schema IR

        Returns:
            The (possibly modified) schema to augment
        """
        ...


@runtime_checkable
class PostGenerateHook(Protocol):
    """Protocol for post-generation hooks.

    Post-generation hooks receive the generated code for each file
    and can transform it before it's written to disk.
    """

    def post_generate(self, filename: str, content: str) -> str:
        """Called after code generation for each file.

        Args:
            filename: The name of the generated file (e.g., "GetMovie.kt")
            content: The generated code content

        Returns:
            The (possibly transformed) code to write
        """
        ...


class AddHeaderHook:
    """Built-in hook to add a header to generated files.

    Header lines that are not already Kotlin comments are turned into
    line comments, so plain text can be passed straight from the CLI.

    Example:
        hook = AddHeaderHook("Auto-generated - do not edit")
        # "// Auto-generated - do not edit"
    """

    COMMENT_PREFIXES = ("//", "/*", "*")

    def __init__(self, header: str):
        self.header = "\n".join(self._comment_line(line) for line in header.split("\n"))

    def _comment_line(self, line: str) -> str:
        if not line or line.lstrip().startswith(self.COMMENT_PREFIXES):
            return line
        return f"// {line}"

    def post_generate(self, _filename: str, content: str) -> str:
        """Add a header to the beginning of the file."""
        if not self.header.endswith("\n"):
            header = self.header + "\n\n"
        else:
            header = self.header + "\n"
        return header + content


class FilterTypesHook:
    """Built-in hook to filter user types by name prefix/suffix.

    Builtin types (scalars and the Query/Mutation roots) are always kept.

    Example:
        # Remove all types starting with underscore
        hook = FilterTypesHook(exclude_prefix="_")
    """

    def __init__(
        self,
        exclude_prefix: str | None = None,
        exclude_suffix: str | None = None,
        include_prefix: str | None = None,
        include_suffix: str | None = None,
    ):
        self.exclude_prefix = exclude_prefix
        self.exclude_suffix = exclude_suffix
        self.include_prefix = include_prefix
        self.include_suffix = include_suffix

    def _should_include(self, name: str) -> bool:
        """Check if a type should be included."""
        if self.exclude_prefix and name.startswith(self.exclude_prefix):
            return False
        if self.exclude_suffix and name.endswith(self.exclude_suffix):
            return False
        if self.include_prefix and not name.startswith(self.include_prefix):
            return False
        if self.include_suffix and not name.endswith(self.include_suffix):
            return False
        return True

    def pre_generate(self, schema: Schema) -> Schema:
        """Filter types from the schema.

        Root fields returning a dropped type are dropped with it.
        """
        schema.types = {
            name: type_def
            for name, type_def in schema.types.items()
            if type_def.builtin or self._should_include(name)
        }
        for root in (schema.query, schema.mutation):
            root.fields = [f for f in root.fields if f.type.named_type in schema.types]
        return schema


class HookRunner:
    """Runs a collection of hooks in order."""

    def __init__(self):
        self.pre_hooks: list[PreGenerateHook] = []
        self.post_hooks: list[PostGenerateHook] = []

    def add_pre_hook(self, hook: PreGenerateHook):
        """Add a pre-generation hook."""
        self.pre_hooks.append(hook)

    def add_post_hook(self, hook: PostGenerateHook):
        """Add a post-generation hook."""
        self.post_hooks.append(hook)

    def run_pre_hooks(self, schema: Schema) -> Schema:
        """Run all pre-generation hooks in order."""
        for hook in self.pre_hooks:
            schema = hook.pre_generate(schema)
        return schema

    def run_post_hooks(self, filename: str, content: str) -> str:
        """Run all post-generation hooks in order."""
        for hook in self.post_hooks:
            content = hook.post_generate(filename, content)
        return content
