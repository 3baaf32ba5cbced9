from __future__ import annotations
from pathlib import Path
import javalang
from javalang import javadoc, tokenizer, tree as jtree
from javalang.parser import Parser as JavaParser

from apidocs_agent.declaration import (
    ClassDecl,
    DocComment,
    DocTag,
    FieldDecl,
    Marker,
    MarkerValue,
    MarkerValueKind,
    MethodDecl,
    ParamDecl,
    SourceUnit,
    TypeShape,
)
from apidocs_agent.errors import InvalidDeclarationError
from apidocs_agent.parsers.base import SourceParser


# DocBlock 이 params/authors/deprecated 로 따로 들고 있는 태그
STRUCTURED_TAGS = ("param", "author", "deprecated")


def simple_name(name: str) -> str:
    return name.rsplit(".", 1)[-1]


def _squash(text: str | None) -> str:
    return " ".join((text or "").split())


def shape_from_node(node) -> TypeShape:
    """javalang 타입 노드 -> TypeShape.

    java.util.List<String> 은 name='java' -> sub_type ... 체인으로 들어오므로
    마지막 sub_type 의 이름/타입인자를 쓰고, 배열 차원은 루트에서 읽는다.
    """
    if node is None:
        return TypeShape.scalar("Object")
    tail = node
    while getattr(tail, "sub_type", None) is not None:
        tail = tail.sub_type

    args = [_shape_from_argument(a) for a in (getattr(tail, "arguments", None) or [])]
    base = TypeShape.generic(simple_name(getattr(tail, "name", None) or "Object"), args)

    dims = len(getattr(node, "dimensions", None) or [])
    return TypeShape.array_of(base, dims) if dims else base


def _shape_from_argument(arg) -> TypeShape:
    # ? extends Foo / ? super Foo -> Foo, ? -> Object
    inner = getattr(arg, "type", None)
    if inner is None:
        return TypeShape.scalar("Object")
    return shape_from_node(inner)


def parse_type_string(text: str) -> TypeShape:
    """'List<Widget>', 'int[]', 'string[]' 같은 문자열을 TypeShape 로. 실패하면 scalar 로 둔다."""
    raw = (text or "").strip()
    if not raw:
        return TypeShape.scalar("Object")
    try:
        node = JavaParser(tokenizer.tokenize(raw)).parse_type()
    except Exception:
        return TypeShape.scalar(raw)
    return shape_from_node(node)


def parse_doc(raw: str | None) -> DocComment | None:
    if not raw:
        return None
    try:
        block = javadoc.parse(raw)
    except ValueError:
        return None

    tags = [DocTag(name="param", content=_squash(desc), arg=arg) for arg, desc in block.params]
    tags += [DocTag(name="author", content=_squash(a)) for a in block.authors]
    if block.deprecated:
        tags.append(DocTag(name="deprecated", content=_squash(" ".join(block.tags.get("deprecated", [])))))
    for name, values in block.tags.items():
        if name in STRUCTURED_TAGS:
            continue
        tags += [DocTag(name=name, content=_squash(v)) for v in values]
    return DocComment(summary=_squash(block.description), tags=tags)


def marker_value(node) -> MarkerValue:
    if isinstance(node, jtree.ClassReference):
        shape = shape_from_node(node.type)
        return MarkerValue(MarkerValueKind.TYPE, text=shape.text, shape=shape)
    if isinstance(node, jtree.Literal):
        v = node.value or ""
        if v.startswith('"') and v.endswith('"') and len(v) >= 2:
            return MarkerValue(MarkerValueKind.STRING, text=v[1:-1])
        return MarkerValue(MarkerValueKind.OTHER, text=v)
    if isinstance(node, jtree.ElementArrayValue):
        return MarkerValue(MarkerValueKind.ARRAY, items=[marker_value(v) for v in (node.values or [])])
    if isinstance(node, jtree.MemberReference):
        text = f"{node.qualifier}.{node.member}" if node.qualifier else node.member
        return MarkerValue(MarkerValueKind.OTHER, text=text)
    if isinstance(node, jtree.Annotation):
        return MarkerValue(MarkerValueKind.OTHER, text=f"@{simple_name(node.name)}")
    return MarkerValue(MarkerValueKind.OTHER, text=type(node).__name__)


def to_marker(ann) -> Marker:
    name = simple_name(ann.name)
    element = ann.element
    if element is None:
        return Marker(name=name)
    if isinstance(element, list):
        return Marker(name=name, pairs=[(p.name, marker_value(p.value)) for p in element])
    return Marker(name=name, value=marker_value(element))


def _markers(node) -> list[Marker]:
    return [to_marker(a) for a in (getattr(node, "annotations", None) or [])]


class JavaSourceParser(SourceParser):
    def can_parse(self, path: Path, text: str) -> bool:
        return path.suffix.lower() == ".java"

    def parse(self, path: Path, text: str) -> SourceUnit:
        try:
            cu = javalang.parse.parse(text)
        except Exception as e:
            reason = getattr(e, "description", None) or str(e) or type(e).__name__
            raise InvalidDeclarationError(str(path), reason) from e

        package = cu.package.name if cu.package is not None else None
        unit = SourceUnit(package=package)
        for t in cu.types or []:
            if not isinstance(t, (jtree.ClassDeclaration, jtree.InterfaceDeclaration)):
                continue
            unit.classes.append(self._class(t, package))
        return unit

    def _class(self, t, package: str | None) -> ClassDecl:
        decl = ClassDecl(
            name=t.name,
            package=package,
            markers=_markers(t),
            doc=parse_doc(t.documentation),
            type_parameters=[tp.name for tp in (getattr(t, "type_parameters", None) or [])],
        )
        for member in t.body or []:
            if isinstance(member, jtree.MethodDeclaration):
                decl.methods.append(self._method(member))
            elif isinstance(member, jtree.FieldDeclaration):
                shape = shape_from_node(member.type)
                for d in member.declarators:
                    decl.fields.append(FieldDecl(
                        name=d.name,
                        type=shape,
                        modifiers=set(member.modifiers or ()),
                        doc=parse_doc(member.documentation),
                    ))
        return decl

    def _method(self, m) -> MethodDecl:
        params = []
        for p in m.parameters or []:
            shape = shape_from_node(p.type)
            if getattr(p, "varargs", False):
                shape = TypeShape.array_of(shape)
            params.append(ParamDecl(name=p.name, type=shape, markers=_markers(p)))

        return MethodDecl(
            name=m.name,
            modifiers=set(m.modifiers or ()),
            markers=_markers(m),
            doc=parse_doc(m.documentation),
            parameters=params,
            return_type=shape_from_node(m.return_type) if m.return_type is not None else None,
        )
