"""Core modules for GraphQL schema augmentation and code generation."""

from .augmenter import AugmentationReport, SchemaAugmenter, pluralize
from .builder import OperationModelBuilder
from .class_model import (
    ForwardingArgument,
    FunctionCall,
    FunctionParameter,
    GeneratedClass,
    GeneratedClassModel,
    SecondaryConstructor,
)
from .errors import (
    CodegenError,
    DocumentValidationError,
    SchemaConsistencyError,
    TypeCycleError,
    UnknownPickedFieldError,
    UnsupportedDefinitionError,
    UnsupportedOperationError,
    UnsupportedSelectionError,
)
from .generator import CodeGenerator
from .hooks import (
    AddHeaderHook,
    FilterTypesHook,
    HookRunner,
    PostGenerateHook,
    PreGenerateHook,
)
from .ir import (
    ArgumentDef,
    FieldDef,
    Schema,
    SynthesizedInputTypeInfo,
    TypeDef,
    TypeKind,
    TypeRef,
    VariableDefinition,
)
from .parser import OperationLoader, SchemaParser
from .pipeline import CodegenPipeline

__all__ = [
    # Augmentation
    "AugmentationReport",
    "SchemaAugmenter",
    "pluralize",
    # Class model
    "ForwardingArgument",
    "FunctionCall",
    "FunctionParameter",
    "GeneratedClass",
    "GeneratedClassModel",
    "SecondaryConstructor",
    "OperationModelBuilder",
    # Errors
    "CodegenError",
    "DocumentValidationError",
    "SchemaConsistencyError",
    "TypeCycleError",
    "UnknownPickedFieldError",
    "UnsupportedDefinitionError",
    "UnsupportedOperationError",
    "UnsupportedSelectionError",
    # Generator
    "CodeGenerator",
    "CodegenPipeline",
    # Hooks
    "PreGenerateHook",
    "PostGenerateHook",
    "AddHeaderHook",
    "FilterTypesHook",
    "HookRunner",
    # IR types
    "ArgumentDef",
    "FieldDef",
    "Schema",
    "SynthesizedInputTypeInfo",
    "TypeDef",
    "TypeKind",
    "TypeRef",
    "VariableDefinition",
    # Parser
    "OperationLoader",
    "SchemaParser",
]
