#!/usr/bin/env python3
"""variants-struct record generator.

Input:  Python source containing @variants_struct class declarations.
Output: transformed Python source where every tagged declaration is replaced
        by the tagged union it describes plus a record type holding one value
        per variant.
"""

from __future__ import annotations

import argparse
import ast
import dataclasses
import hashlib
import keyword
import pathlib
import re
import sys
from typing import Dict, List, Sequence, Tuple

GENERATOR_VERSION = "0.2.0"
FORMAT_VERSION = "1"
MARKER = "variants_struct"
RECORD_SUFFIX = "Struct"
DIGEST_PATTERN = re.compile(r"^# digest: ([0-9a-f]{64})$", re.MULTILINE)
PRELUDE_STDLIB = (
    "import dataclasses as _vs_dataclasses",
    "import typing as _vs_typing",
)
PRELUDE_RUNTIME = "import variants_struct_runtime as _vs_runtime"
# Line boundaries as the Python tokenizer counts them (not str.splitlines).
LINE_BREAK = re.compile(r"(?<=\n)|(?<=\r)(?!\n)")

DIRECTIVE_STRUCT_NAME = "struct_name"
DIRECTIVE_STRUCT_DERIVE = "struct_derive"
DIRECTIVE_STRUCT_BOUNDS = "struct_bounds"
DIRECTIVE_FIELD_NAMES = "field_names"
DIRECTIVES = (
    DIRECTIVE_STRUCT_NAME,
    DIRECTIVE_STRUCT_DERIVE,
    DIRECTIVE_STRUCT_BOUNDS,
    DIRECTIVE_FIELD_NAMES,
)

# Field identifiers may not shadow the record's own members or the
# constructor's receiver.
RESERVED_MEMBERS = frozenset({"get_unchecked", "get_mut_unchecked", "get", "get_mut", "self"})

WORD_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


class GenerationError(RuntimeError):
    def __init__(self, message: str, line: int, col: int) -> None:
        super().__init__(message)
        self.line = line
        self.col = col

    @classmethod
    def at(cls, node: ast.AST, message: str) -> "GenerationError":
        return cls(message, node.lineno, node.col_offset + 1)


class SchemaShapeError(GenerationError):
    pass


class DirectiveError(GenerationError):
    pass


@dataclasses.dataclass
class Diagnostic:
    message: str
    line: int
    col: int


@dataclasses.dataclass
class VariantSpec:
    name: str
    shape: str  # unit | tuple | named
    arity: int = 0
    payload_type: str = ""
    line: int = 0
    col: int = 0


@dataclasses.dataclass
class SchemaBlock:
    name: str
    visibility: str  # public | private
    start_line: int
    end_line: int
    line: int
    col: int
    variants: List[VariantSpec] = dataclasses.field(default_factory=list)
    decorators: List[ast.expr] = dataclasses.field(default_factory=list)
    docstring: str | None = None


@dataclasses.dataclass
class Directives:
    record_name: str
    derives: List[str] = dataclasses.field(default_factory=list)
    bounds: List[str] = dataclasses.field(default_factory=list)
    field_names: Dict[str, str] = dataclasses.field(default_factory=dict)


@dataclasses.dataclass
class ClassifiedVariant:
    name: str
    kind: str  # direct | keyed
    field_name: str
    stored_type: str
    payload_type: str = ""


@dataclasses.dataclass
class RecordPlan:
    name: str
    union_name: str
    visibility: str
    type_var: str
    fields: List[ClassifiedVariant] = dataclasses.field(default_factory=list)
    init_params: List[ClassifiedVariant] = dataclasses.field(default_factory=list)
    derives: List[str] = dataclasses.field(default_factory=list)
    bounds: List[str] = dataclasses.field(default_factory=list)


def fail(path: pathlib.Path, error: GenerationError) -> None:
    print(f"{path}:{error.line}:{error.col}: error: {error}", file=sys.stderr)


def warn(path: pathlib.Path, diagnostic: Diagnostic) -> None:
    print(f"{path}:{diagnostic.line}:{diagnostic.col}: warning: {diagnostic.message}", file=sys.stderr)


# --- identifiers ---


def snake_case(name: str) -> str:
    stripped = name.lstrip("_")
    prefix = name[: len(name) - len(stripped)]
    words: List[str] = []
    for chunk in stripped.split("_"):
        words.extend(word.lower() for word in WORD_BOUNDARY.split(chunk) if word)
    if not words:
        return name
    return prefix + "_".join(words)


def escape_identifier(name: str) -> str:
    if keyword.iskeyword(name) or name in RESERVED_MEMBERS:
        return name + "_"
    return name


def assign_field_names(variants: Sequence[VariantSpec], overrides: Dict[str, str]) -> Dict[str, str]:
    used: set[str] = set()
    names: Dict[str, str] = {}

    # Explicit names are honored verbatim (after escaping), derived names yield.
    for variant in variants:
        if variant.name not in overrides:
            continue
        candidate = escape_identifier(overrides[variant.name])
        if candidate in used:
            raise DirectiveError(
                f"field name '{candidate}' is assigned to more than one variant",
                variant.line,
                variant.col,
            )
        used.add(candidate)
        names[variant.name] = candidate

    for variant in variants:
        if variant.name in names:
            continue
        base = escape_identifier(snake_case(variant.name))
        candidate = base
        suffix = 2
        while candidate in used:
            candidate = f"{base}_{suffix}"
            suffix += 1
        used.add(candidate)
        names[variant.name] = candidate

    return names


# --- schema front end ---


def dotted_path(expr: ast.expr) -> str | None:
    parts: List[str] = []
    while isinstance(expr, ast.Attribute):
        parts.append(expr.attr)
        expr = expr.value
    if not isinstance(expr, ast.Name):
        return None
    parts.append(expr.id)
    return ".".join(reversed(parts))


def is_marker(decorator: ast.expr) -> bool:
    target = decorator.func if isinstance(decorator, ast.Call) else decorator
    if not (isinstance(target, ast.Name) and target.id == MARKER):
        return False
    if isinstance(decorator, ast.Call) and (decorator.args or decorator.keywords):
        raise DirectiveError.at(decorator, f"@{MARKER} takes no arguments")
    return True


def directive_name(decorator: ast.expr) -> str | None:
    target = decorator.func if isinstance(decorator, ast.Call) else decorator
    if isinstance(target, ast.Name) and target.id in DIRECTIVES:
        return target.id
    return None


def parse_variant(expr: ast.expr) -> VariantSpec:
    line, col = expr.lineno, expr.col_offset + 1
    if isinstance(expr, ast.Name):
        return VariantSpec(name=expr.id, shape="unit", line=line, col=col)

    if isinstance(expr, ast.Call) and isinstance(expr.func, ast.Name):
        name = expr.func.id
        if any(isinstance(arg, ast.Starred) for arg in expr.args) or any(kw.arg is None for kw in expr.keywords):
            raise SchemaShapeError(f"variant '{name}': unpacked payloads are not supported", line, col)
        if expr.keywords:
            return VariantSpec(name=name, shape="named", arity=len(expr.args) + len(expr.keywords), line=line, col=col)
        payload = ast.unparse(expr.args[0]) if len(expr.args) == 1 else ""
        return VariantSpec(name=name, shape="tuple", arity=len(expr.args), payload_type=payload, line=line, col=col)

    raise SchemaShapeError(
        "expected a variant declaration ('Name' or 'Name(KeyType)')",
        line,
        col,
    )


def parse_schema(node: ast.ClassDef) -> SchemaBlock:
    if node.name.startswith("__"):
        raise SchemaShapeError.at(node, f"union name '{node.name}' must not start with '__'")
    if node.bases or node.keywords:
        raise SchemaShapeError.at(node, f"@{MARKER} classes cannot declare base classes or class keywords")

    block = SchemaBlock(
        name=node.name,
        visibility="private" if node.name.startswith("_") else "public",
        start_line=min(d.lineno for d in node.decorator_list),
        end_line=node.end_lineno or node.lineno,
        line=node.lineno,
        col=node.col_offset + 1,
        decorators=[d for d in node.decorator_list if not is_marker(d)],
    )

    body = list(node.body)
    if body and isinstance(body[0], ast.Expr) and isinstance(body[0].value, ast.Constant):
        if isinstance(body[0].value.value, str):
            block.docstring = ast.get_docstring(node)
            body = body[1:]

    seen: set[str] = set()
    for stmt in body:
        if isinstance(stmt, ast.Pass):
            continue
        if not isinstance(stmt, ast.Expr):
            raise SchemaShapeError.at(stmt, f"only variant declarations are allowed in a @{MARKER} class body")
        variant = parse_variant(stmt.value)
        if variant.name.startswith("__"):
            raise SchemaShapeError(f"variant name '{variant.name}' must not start with '__'", variant.line, variant.col)
        if variant.name in seen:
            raise SchemaShapeError(f"duplicate variant '{variant.name}'", variant.line, variant.col)
        seen.add(variant.name)
        block.variants.append(variant)

    return block


def find_schema_blocks(tree: ast.Module) -> List[SchemaBlock]:
    top_level = {id(stmt) for stmt in tree.body}
    blocks: List[SchemaBlock] = []

    for node in ast.walk(tree):
        if not isinstance(node, ast.ClassDef):
            continue
        if not any(is_marker(d) for d in node.decorator_list):
            continue
        if id(node) not in top_level:
            raise SchemaShapeError.at(node, f"@{MARKER} classes must be declared at module level")
        blocks.append(parse_schema(node))

    blocks.sort(key=lambda b: b.start_line)
    return blocks


# --- directives ---


def parse_path_arguments(call: ast.Call, name: str) -> List[str]:
    if call.keywords:
        raise DirectiveError.at(call.keywords[0].value, f"{name}: only path arguments are accepted")
    paths: List[str] = []
    for arg in call.args:
        path = dotted_path(arg)
        if path is None:
            raise DirectiveError.at(arg, f"{name}: only path arguments are accepted")
        paths.append(path)
    return paths


def parse_identifier_literal(expr: ast.expr, name: str) -> str:
    if not (isinstance(expr, ast.Constant) and isinstance(expr.value, str)):
        raise DirectiveError.at(expr, f"{name}: must be a str literal")
    value = expr.value
    if not value.isidentifier():
        raise DirectiveError.at(expr, f"{name}: '{value}' is not a valid identifier")
    return value


def parse_directives(block: SchemaBlock, warnings: List[Diagnostic]) -> Directives:
    record_name: str | None = None
    derives: List[str] = []
    bounds: List[str] = []
    field_names: Dict[str, str] = {}
    variant_names = {v.name for v in block.variants}

    for decorator in block.decorators:
        name = directive_name(decorator)
        if name is None:
            continue
        if not isinstance(decorator, ast.Call):
            raise DirectiveError.at(decorator, f"{name}: arguments are required, e.g. @{name}(...)")

        if name == DIRECTIVE_STRUCT_NAME:
            if len(decorator.args) != 1 or decorator.keywords:
                raise DirectiveError.at(decorator, f"{name}: expected exactly one argument")
            value = parse_identifier_literal(decorator.args[0], name)
            if keyword.iskeyword(value):
                raise DirectiveError.at(decorator.args[0], f"{name}: '{value}' is a reserved word")
            if record_name is None:
                record_name = value
            elif value != record_name:
                warnings.append(
                    Diagnostic(
                        f"{name}: conflicting value '{value}' ignored, keeping '{record_name}'",
                        decorator.lineno,
                        decorator.col_offset + 1,
                    )
                )
        elif name == DIRECTIVE_STRUCT_DERIVE:
            derives.extend(parse_path_arguments(decorator, name))
        elif name == DIRECTIVE_STRUCT_BOUNDS:
            bounds.extend(parse_path_arguments(decorator, name))
        else:
            if decorator.args:
                raise DirectiveError.at(decorator.args[0], f"{name}: expected Variant=\"field\" keyword arguments")
            for kw in decorator.keywords:
                if kw.arg is None:
                    raise DirectiveError.at(kw.value, f"{name}: expected Variant=\"field\" keyword arguments")
                if kw.arg not in variant_names:
                    raise DirectiveError.at(kw.value, f"{name}: unknown variant '{kw.arg}'")
                value = parse_identifier_literal(kw.value, name)
                if value.startswith("__"):
                    raise DirectiveError.at(kw.value, f"{name}: field name '{value}' must not start with '__'")
                if field_names.get(kw.arg, value) != value:
                    raise DirectiveError.at(kw.value, f"{name}: conflicting field names for variant '{kw.arg}'")
                field_names[kw.arg] = value

    if record_name is None:
        record_name = f"{block.name}{RECORD_SUFFIX}"
    if block.visibility == "private" and not record_name.startswith("_"):
        record_name = "_" + record_name
    if record_name == block.name:
        raise DirectiveError(f"record name '{record_name}' clashes with the union name", block.line, block.col)

    return Directives(record_name=record_name, derives=derives, bounds=bounds, field_names=field_names)


# --- classification and planning ---


def classify_variant(variant: VariantSpec, field_name: str, value_type: str) -> ClassifiedVariant:
    if variant.shape == "unit":
        return ClassifiedVariant(name=variant.name, kind="direct", field_name=field_name, stored_type=value_type)
    if variant.shape == "named":
        raise SchemaShapeError(
            f"variant '{variant.name}': named payloads are not supported; use '{variant.name}(KeyType)'",
            variant.line,
            variant.col,
        )
    if variant.arity != 1:
        raise SchemaShapeError(
            f"variant '{variant.name}': only variants with exactly one value are supported (found {variant.arity})",
            variant.line,
            variant.col,
        )
    return ClassifiedVariant(
        name=variant.name,
        kind="keyed",
        field_name=field_name,
        stored_type=f"dict[{variant.payload_type}, {value_type}]",
        payload_type=variant.payload_type,
    )


def classify_variants(block: SchemaBlock, directives: Directives, value_type: str) -> List[ClassifiedVariant]:
    # Shape errors are reported before naming errors.
    for variant in block.variants:
        classify_variant(variant, "", value_type)
    names = assign_field_names(block.variants, directives.field_names)
    return [classify_variant(v, names[v.name], value_type) for v in block.variants]


def plan_record(block: SchemaBlock, directives: Directives) -> RecordPlan:
    type_var = f"_T_{directives.record_name.lstrip('_')}"
    fields = classify_variants(block, directives, type_var)
    return RecordPlan(
        name=directives.record_name,
        union_name=block.name,
        visibility=block.visibility,
        type_var=type_var,
        fields=fields,
        init_params=[f for f in fields if f.kind == "direct"],
        derives=list(directives.derives),
        bounds=list(directives.bounds),
    )


# --- rendering ---


@dataclasses.dataclass(frozen=True)
class Accessor:
    name: str
    returns: str
    direct: str
    keyed: str


ACCESSORS = (
    Accessor(
        "get_unchecked",
        "{t}",
        "self.{field}",
        "_vs_runtime.lookup(self.{field}, key, var)",
    ),
    Accessor(
        "get_mut_unchecked",
        "_vs_runtime.Ref[{t}]",
        '_vs_runtime.FieldRef(self, "{field}")',
        "_vs_runtime.entry(self.{field}, key, var)",
    ),
    Accessor(
        "get",
        "_vs_typing.Optional[{t}]",
        "self.{field}",
        "self.{field}.get(key)",
    ),
    Accessor(
        "get_mut",
        "_vs_typing.Optional[_vs_runtime.Ref[{t}]]",
        '_vs_runtime.FieldRef(self, "{field}")',
        "_vs_runtime.find_entry(self.{field}, key)",
    ),
)


def variant_class_name(union_name: str, variant_name: str) -> str:
    return f"_{union_name}_{variant_name}"


def variant_signature(variant: VariantSpec) -> str:
    if variant.shape == "unit":
        return variant.name
    return f"{variant.name}({variant.payload_type})"


def render_docstring(text: str, indent: str) -> List[str]:
    if '"""' in text or "\\" in text or text.endswith('"'):
        return [f"{indent}{text!r}"]
    doc_lines = text.splitlines() or [""]
    if len(doc_lines) == 1:
        return [f'{indent}"""{doc_lines[0]}"""']
    lines = [f'{indent}"""{doc_lines[0]}']
    lines.extend(f"{indent}{line}" if line else "" for line in doc_lines[1:])
    lines.append(f'{indent}"""')
    return lines


def render_union(block: SchemaBlock) -> List[str]:
    lines: List[str] = []
    for decorator in block.decorators:
        if directive_name(decorator) is None:
            lines.append(f"@{ast.unparse(decorator)}")
    lines.append(f"class {block.name}:")
    if block.docstring is not None:
        lines.extend(render_docstring(block.docstring, "    "))
    else:
        summary = ", ".join(variant_signature(v) for v in block.variants) or "no variants"
        lines.extend(render_docstring(f"Tagged union of {summary}.", "    "))
    lines.append("")
    lines.append("    __slots__ = ()")

    for variant in block.variants:
        class_name = variant_class_name(block.name, variant.name)
        lines.append("")
        lines.append("")
        lines.append("@_vs_dataclasses.dataclass(frozen=True, slots=True)")
        lines.append(f"class {class_name}({block.name}):")
        if variant.shape == "unit":
            lines.append("    pass")
        else:
            lines.append(f"    value: {variant.payload_type}")

    if block.variants:
        lines.append("")
        lines.append("")
    for variant in block.variants:
        class_name = variant_class_name(block.name, variant.name)
        lines.append(f'{class_name}.__qualname__ = "{block.name}.{variant.name}"')
        if variant.shape == "unit":
            lines.append(f"{block.name}.{variant.name} = {class_name}()")
        else:
            lines.append(f"{block.name}.{variant.name} = {class_name}")

    return lines


def render_accessor(plan: RecordPlan, accessor: Accessor) -> List[str]:
    lines: List[str] = []
    returns = accessor.returns.format(t=plan.type_var)
    lines.append(f"    def {accessor.name}(self, var: {plan.union_name}) -> {returns}:")
    lines.append("        match var:")
    for field in plan.fields:
        if field.kind == "direct":
            lines.append(f"            case {plan.union_name}.{field.name}:")
            lines.append(f"                return {accessor.direct.format(field=field.field_name)}")
        else:
            lines.append(f"            case {plan.union_name}.{field.name}(key):")
            lines.append(f"                return {accessor.keyed.format(field=field.field_name)}")
    lines.append("            case _:")
    lines.append(f'                raise _vs_runtime.not_a_variant(var, "{plan.union_name}")')
    return lines


def render_record(plan: RecordPlan) -> List[str]:
    lines: List[str] = []

    bound = ""
    if len(plan.bounds) > 1:
        bound = f"_Bounds_{plan.name.lstrip('_')}"
        lines.append(f"class {bound}({', '.join(plan.bounds)}, _vs_typing.Protocol):")
        lines.append("    pass")
        lines.append("")
        lines.append("")
    elif plan.bounds:
        bound = plan.bounds[0]

    if bound:
        lines.append(f'{plan.type_var} = _vs_typing.TypeVar("{plan.type_var}", bound={bound})')
    else:
        lines.append(f'{plan.type_var} = _vs_typing.TypeVar("{plan.type_var}")')
    lines.append("")
    lines.append("")

    for derive in plan.derives:
        lines.append(f"@{derive}")
    lines.append(f"class {plan.name}(_vs_typing.Generic[{plan.type_var}]):")
    lines.append(f'    """One value slot per variant of {plan.union_name}."""')
    lines.append("")

    slot_names = [f'"{f.field_name}"' for f in plan.fields]
    if len(slot_names) == 1:
        lines.append(f"    __slots__ = ({slot_names[0]},)")
    else:
        lines.append(f"    __slots__ = ({', '.join(slot_names)})")
    if plan.fields:
        lines.append("")
        for field in plan.fields:
            lines.append(f"    {field.field_name}: {field.stored_type}")

    lines.append("")
    params = "".join(f", {f.field_name}: {plan.type_var}" for f in plan.init_params)
    lines.append(f"    def __init__(self{params}) -> None:")
    if not plan.fields:
        lines.append("        pass")
    for field in plan.fields:
        if field.kind == "direct":
            lines.append(f"        self.{field.field_name} = {field.field_name}")
        else:
            lines.append(f"        self.{field.field_name} = {{}}")

    for accessor in ACCESSORS:
        lines.append("")
        lines.extend(render_accessor(plan, accessor))

    return lines


def render_prelude(source: str) -> str:
    def missing(statement: str) -> bool:
        return re.search(rf"^{re.escape(statement)}[ \t]*\r?$", source, re.MULTILINE) is None

    groups = [
        [statement for statement in PRELUDE_STDLIB if missing(statement)],
        [PRELUDE_RUNTIME] if missing(PRELUDE_RUNTIME) else [],
    ]
    prelude = "\n\n".join("\n".join(group) for group in groups if group)
    return prelude + "\n\n\n" if prelude else ""


def apply_substitutions(source: str, blocks: Sequence[SchemaBlock], plans: Sequence[RecordPlan]) -> str:
    source_lines = LINE_BREAK.split(source)
    pieces: List[str] = []
    cursor = 0
    prelude = render_prelude(source)

    for block, plan in zip(blocks, plans):
        pieces.extend(source_lines[cursor : block.start_line - 1])
        replacement = "\n".join(render_union(block) + ["", ""] + render_record(plan)) + "\n"
        if prelude:
            replacement = prelude + replacement
            prelude = ""
        pieces.append(replacement)
        cursor = block.end_line

    pieces.extend(source_lines[cursor:])
    return "".join(pieces)


def compute_file_digest(source_bytes: bytes) -> str:
    h = hashlib.sha256()
    h.update(GENERATOR_VERSION.encode("utf-8"))
    h.update(b"\x00")
    h.update(FORMAT_VERSION.encode("utf-8"))
    h.update(b"\x00")
    h.update(source_bytes)
    return h.hexdigest()


def parse_source(source_path: pathlib.Path, source_text: str) -> ast.Module:
    try:
        return ast.parse(source_text, filename=str(source_path))
    except SyntaxError as e:
        raise GenerationError(e.msg, e.lineno or 1, e.offset or 1) from e


def render_file(
    source_path: pathlib.Path, source_text: str, source_bytes: bytes
) -> Tuple[str, List[Diagnostic]]:
    blocks = find_schema_blocks(parse_source(source_path, source_text))
    warnings: List[Diagnostic] = []
    plans = [plan_record(block, parse_directives(block, warnings)) for block in blocks]

    transformed = apply_substitutions(source_text, blocks, plans)
    digest = compute_file_digest(source_bytes)
    source_label = str(source_path)
    try:
        source_label = str(source_path.resolve().relative_to(pathlib.Path.cwd().resolve()))
    except ValueError:
        source_label = str(source_path.resolve())

    meta = (
        "# variants-struct-generated\n"
        f"# source: {source_label}\n"
        f"# generator_version: {GENERATOR_VERSION}\n"
        f"# format_version: {FORMAT_VERSION}\n"
        f"# digest: {digest}\n\n"
    )
    return meta + transformed, warnings


def extract_existing_digest(text: str) -> str | None:
    m = DIGEST_PATTERN.search(text)
    if not m:
        return None
    return m.group(1)


def run(args: argparse.Namespace) -> int:
    in_path = pathlib.Path(args.input)
    out_path = pathlib.Path(args.output)

    if not in_path.exists():
        print(f"error: input file does not exist: {in_path}", file=sys.stderr)
        return 1

    source_bytes = in_path.read_bytes()
    source_text = source_bytes.decode("utf-8")

    try:
        rendered, warnings = render_file(in_path, source_text, source_bytes)
    except GenerationError as e:
        fail(in_path, e)
        return 1

    for diagnostic in warnings:
        warn(in_path, diagnostic)

    if args.check:
        if not out_path.exists():
            print(f"{out_path} is missing (run generator)", file=sys.stderr)
            return 1
        existing = out_path.read_text(encoding="utf-8")
        if existing != rendered:
            print(f"{out_path} is out of date (run generator)", file=sys.stderr)
            return 1
        print(f"up-to-date: {out_path}")
        return 0

    if out_path.exists():
        existing = out_path.read_text(encoding="utf-8")
        old_digest = extract_existing_digest(existing)
        if existing == rendered or (old_digest and old_digest == extract_existing_digest(rendered)):
            print(f"unchanged: {out_path}")
            return 0

    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(rendered, encoding="utf-8")
    print(f"generated: {out_path}")
    return 0


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate variant-keyed record modules from .py.variants sources")
    parser.add_argument("--in", dest="input", required=True, help="Input .py.variants file")
    parser.add_argument("--out", dest="output", required=True, help="Output generated module")
    parser.add_argument("--check", action="store_true", help="Check output is up to date")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    return run(build_arg_parser().parse_args(argv))


if __name__ == "__main__":
    raise SystemExit(main())
