"""Code generator for operation class models.

Renders Jinja2 templates to produce Kotlin source from a GeneratedClassModel.

Supports custom templates via the template_dir parameter:
    generator = CodeGenerator("com.example.connector", template_dir="./my_templates")

Template lookup order:
1. User's template directory (if provided)
2. Package default templates
"""

import os
from pathlib import Path

from jinja2 import ChoiceLoader, Environment, FileSystemLoader, PackageLoader, select_autoescape

from .class_model import GeneratedClassModel
from .hooks import HookRunner

# Kotlin hard keywords that cannot be used as identifiers unescaped
KOTLIN_KEYWORDS = {
    "as", "break", "class", "continue", "do", "else", "false", "for", "fun",
    "if", "in", "interface", "is", "null", "object", "package", "return",
    "super", "this", "throw", "true", "try", "typealias", "typeof", "val",
    "var", "when", "while",
}


def kotlin_name(name: str) -> str:
    """Make an identifier safe for Kotlin by backquoting keywords."""
    if name in KOTLIN_KEYWORDS:
        return f"`{name}`"
    return name


class CodeGenerator:
    """Generates Kotlin code from operation class models.

    Supports custom templates via the template_dir parameter.
    Templates in template_dir take precedence over built-in templates.

    Available templates to override:
        - operation.kt.j2 - One Kotlin file per operation

    Example:
        generator = CodeGenerator(
            kotlin_package="com.example.connector",
            template_dir="./my_templates",
        )
        path = generator.write(model, "./generated")
    """

    TEMPLATE_NAME = "operation.kt.j2"
    FILE_EXTENSION = ".kt"

    def __init__(
        self,
        kotlin_package: str,
        template_dir: str | None = None,
        hook_runner: HookRunner | None = None,
    ):
        """Initialize the code generator.

        Args:
            kotlin_package: Package declared at the top of every generated file
            template_dir: Optional directory with custom templates
            hook_runner: Optional hooks applied to every rendered file
        """
        self.kotlin_package = kotlin_package
        self.template_dir = template_dir
        self.hook_runner = hook_runner or HookRunner()

        # Build template loader - custom templates take precedence
        loaders = []
        if template_dir:
            template_path = Path(template_dir)
            if template_path.is_dir():
                loaders.append(FileSystemLoader(str(template_path)))
        loaders.append(PackageLoader("gql_ktgen", "templates"))

        self.env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=select_autoescape(),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self.env.filters["kotlin_name"] = kotlin_name

    def filename(self, model: GeneratedClassModel) -> str:
        return model.operation_name + self.FILE_EXTENSION

    def render(self, model: GeneratedClassModel) -> str:
        """Render the Kotlin source for one operation, before post hooks."""
        template = self.env.get_template(self.TEMPLATE_NAME)
        return template.render(model=model, kotlin_package=self.kotlin_package)

    def write(self, model: GeneratedClassModel, output_dir: str) -> str:
        """Render, run post-generation hooks and write the file.

        Returns:
            The path of the written file
        """
        filename = self.filename(model)
        content = self.hook_runner.run_post_hooks(filename, self.render(model))

        full_path = os.path.join(output_dir, filename)
        os.makedirs(output_dir, exist_ok=True)
        with open(full_path, "w") as f:
            f.write(content)
        return full_path
