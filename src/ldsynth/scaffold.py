"""Repository scaffolding for discovered entity types.

Discovery scans Python sources for classes deriving from a base marker
(``Entity`` by default). Each discovered type gets one ``<Name>Repository``
class deriving from :class:`ldsynth.repository.RepositoryBase`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Sequence

import libcst as cst

DEFAULT_BASE = "Entity"
REPOSITORY_SUFFIX = "Repository"

_GENERATED_HEADER = "# Generated by ldsynth scaffold. Do not edit."
_EXCLUDED_DIRS = {"__pycache__", ".git", ".venv", "venv", "build", "dist"}


@dataclass(frozen=True)
class DiscoveredType:
    name: str
    module: str


@dataclass(frozen=True)
class ParseFailureWitness:
    path: Path
    error: str


@dataclass(frozen=True)
class DiscoveryResult:
    types: List[DiscoveredType] = field(default_factory=list)
    failures: List[ParseFailureWitness] = field(default_factory=list)

    @property
    def warnings(self) -> List[str]:
        return [f"{failure.path}: {failure.error}" for failure in self.failures]


def iter_python_paths(paths: Iterable[Path]) -> List[Path]:
    """Expand input paths to python files in a stable order."""
    out: List[Path] = []
    for path in paths:
        if path.is_dir():
            for root, dirnames, filenames in os.walk(path, topdown=True):
                dirnames[:] = sorted(d for d in dirnames if d not in _EXCLUDED_DIRS)
                for filename in sorted(filenames):
                    if filename.endswith(".py"):
                        out.append(Path(root) / filename)
        elif path.suffix == ".py":
            out.append(path)
    return out


def module_name(path: Path, root: Path) -> str:
    try:
        relative = path.resolve().relative_to(root.resolve())
    except ValueError:
        relative = Path(path.name)
    parts = list(relative.with_suffix("").parts)
    if parts and parts[-1] == "__init__":
        parts.pop()
    if parts and parts[0] == "src":
        parts.pop(0)
    return ".".join(parts)


def _base_name(expr: cst.BaseExpression) -> str:
    if isinstance(expr, cst.Name):
        return expr.value
    if isinstance(expr, cst.Attribute):
        return expr.attr.value
    if isinstance(expr, cst.Subscript):
        return _base_name(expr.value)
    return ""


class _EntityCollector(cst.CSTVisitor):
    def __init__(self, base: str) -> None:
        self.base = base
        self.names: List[str] = []
        self._depth = 0

    def visit_ClassDef(self, node: cst.ClassDef) -> bool:
        # Only module-level classes are importable by name.
        if self._depth == 0 and any(_base_name(arg.value) == self.base for arg in node.bases):
            self.names.append(node.name.value)
        self._depth += 1
        return True

    def leave_ClassDef(self, original_node: cst.ClassDef) -> None:
        self._depth -= 1

    def visit_FunctionDef(self, node: cst.FunctionDef) -> bool:
        return False


def discover_entities(
    paths: Sequence[Path],
    *,
    root: Path | None = None,
    base: str = DEFAULT_BASE,
) -> DiscoveryResult:
    base_root = root if root is not None else Path.cwd()
    types: List[DiscoveredType] = []
    failures: List[ParseFailureWitness] = []
    for path in iter_python_paths(paths):
        try:
            source = path.read_text(encoding="utf-8")
            module = cst.parse_module(source)
        except (OSError, UnicodeError) as exc:
            failures.append(ParseFailureWitness(path=path, error=f"read failed: {exc}"))
            continue
        except cst.ParserSyntaxError as exc:
            failures.append(ParseFailureWitness(path=path, error=f"LibCST parse failed: {exc.message}"))
            continue
        collector = _EntityCollector(base)
        module.visit(collector)
        owner = module_name(path, base_root)
        types.extend(DiscoveredType(name=name, module=owner) for name in collector.names)
    return DiscoveryResult(types=types, failures=failures)


def repository_name(discovered: DiscoveredType) -> str:
    return f"{discovered.name}{REPOSITORY_SUFFIX}"


def render_repositories(types: Sequence[DiscoveredType]) -> str:
    """Render a module holding one repository class per discovered type."""
    body: List[cst.BaseStatement] = [
        cst.parse_statement("from __future__ import annotations"),
        cst.parse_statement("from ldsynth.repository import RepositoryBase").with_changes(
            leading_lines=[cst.EmptyLine()]
        ),
    ]
    by_module: dict[str, List[str]] = {}
    for discovered in types:
        names = by_module.setdefault(discovered.module, [])
        if discovered.name not in names:
            names.append(discovered.name)
    for owner in sorted(by_module):
        if not owner:
            continue
        body.append(
            cst.parse_statement(f"from {owner} import {', '.join(sorted(by_module[owner]))}")
        )
    seen: set[DiscoveredType] = set()
    for discovered in types:
        if discovered in seen:
            continue
        seen.add(discovered)
        docstring = cst.SimpleStatementLine(
            [cst.Expr(cst.SimpleString(f'"""Repository for {discovered.name} entities."""'))]
        )
        body.append(
            cst.ClassDef(
                name=cst.Name(repository_name(discovered)),
                bases=[
                    cst.Arg(
                        cst.Subscript(
                            value=cst.Name("RepositoryBase"),
                            slice=[cst.SubscriptElement(cst.Index(cst.Name(discovered.name)))],
                        )
                    )
                ],
                body=cst.IndentedBlock(body=[docstring]),
                leading_lines=[cst.EmptyLine(), cst.EmptyLine()],
            )
        )
    module = cst.Module(
        body=body,
        header=[cst.EmptyLine(comment=cst.Comment(_GENERATED_HEADER))],
    )
    return module.code
