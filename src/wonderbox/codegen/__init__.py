from wonderbox.codegen.decorator import autoresolvable, resolve_dependencies
from wonderbox.codegen.diagnostics import GenerationDiagnostic

__all__ = [
    "GenerationDiagnostic",
    "autoresolvable",
    "resolve_dependencies",
]
