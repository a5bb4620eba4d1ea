"""End-to-end generation: schema files and operation files in, Kotlin files out."""

from collections.abc import Callable

from .augmenter import SchemaAugmenter
from .builder import OperationModelBuilder
from .generator import CodeGenerator
from .hooks import HookRunner
from .ir import Schema
from .parser import OperationLoader, SchemaParser


class CodegenPipeline:
    """Runs parse, augment, validate, build and render for a set of operations.

    Progress is reported through ``on_event``; the pipeline itself never
    prints.

    Example:
        pipeline = CodegenPipeline(
            schema_path="./schema",
            operations_path="./connector",
            output_dir="./generated",
            kotlin_package="com.example.connector",
            on_event=print,
        )
        written = pipeline.run()
    """

    def __init__(
        self,
        schema_path: str,
        operations_path: str,
        output_dir: str,
        kotlin_package: str,
        template_dir: str | None = None,
        hooks: HookRunner | None = None,
        on_event: Callable[[str], None] | None = None,
    ):
        self.schema_path = schema_path
        self.operations_path = operations_path
        self.output_dir = output_dir
        self.kotlin_package = kotlin_package
        self.template_dir = template_dir
        self.hooks = hooks or HookRunner()
        self.on_event = on_event
        self.schema: Schema | None = None

    def _emit(self, message: str):
        if self.on_event is not None:
            self.on_event(message)

    def load_schema(self) -> Schema:
        """Parse the schema, run pre hooks and augment it."""
        self._emit(f"Parsing schema: {self.schema_path}")
        schema = SchemaParser(self.schema_path).parse_all()
        schema = self.hooks.run_pre_hooks(schema)
        self._emit(f"  Types: {len(schema.non_builtin_types())}")

        augmenter = SchemaAugmenter()
        augmented = augmenter.augment(schema)
        for line in augmenter.report.lines():
            self._emit(line)
        self.schema = augmented
        return augmented

    def run(self) -> list[str]:
        """Generate one Kotlin file per operation.

        Returns:
            Paths of the written files, in operation name order
        """
        schema = self.load_schema()

        self._emit(f"Loading operations: {self.operations_path}")
        operations = OperationLoader(schema).load(self.operations_path)
        operations = sorted(operations, key=lambda op: op.name.value if op.name else "")

        builder = OperationModelBuilder(schema)
        generator = CodeGenerator(
            self.kotlin_package,
            template_dir=self.template_dir,
            hook_runner=self.hooks,
        )

        written = []
        for operation in operations:
            model = builder.build(operation)
            self._emit(f"Generating: {generator.filename(model)}")
            written.append(generator.write(model, self.output_dir))
        return written
