from mdinclude.config import ConfigError, IncludeConfig, load_config
from mdinclude.ctx import IncludeLoaderContext, RenderResult, resolve_includes
from mdinclude.diagnostics import (
    Diagnostic,
    DiagnosticKind,
    IncludeWarning,
    ResolutionError,
    RootDocumentError,
)
from mdinclude.graph import Document, Edge, GraphBuilder, InclusionGraph, NodeState
from mdinclude.render import RenderContext, RenderMode, render, render_flat, render_hierarchical
from mdinclude.resolver import PathResolver
from mdinclude.scanner import Directive, Literal, directives, scan
from mdinclude.source import FileSystemSource, MappingSource, TextSource

__all__ = [
    "ConfigError",
    "Diagnostic",
    "DiagnosticKind",
    "Directive",
    "Document",
    "Edge",
    "FileSystemSource",
    "GraphBuilder",
    "IncludeConfig",
    "IncludeLoaderContext",
    "IncludeWarning",
    "InclusionGraph",
    "Literal",
    "MappingSource",
    "NodeState",
    "PathResolver",
    "RenderContext",
    "RenderMode",
    "RenderResult",
    "ResolutionError",
    "RootDocumentError",
    "TextSource",
    "directives",
    "load_config",
    "render",
    "render_flat",
    "render_hierarchical",
    "resolve_includes",
    "scan",
]
