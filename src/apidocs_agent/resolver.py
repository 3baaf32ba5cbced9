"""응답 타입의 구조 해석."""
from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Sequence

from apidocs_agent.declaration import ClassDecl, TypeKind, TypeShape
from apidocs_agent.errors import InvalidDeclarationError
from apidocs_agent.model import FieldRecord, ResponseRecord
from apidocs_agent.normalize import OBJECT, normalize_shape, split_element, unify_type
from apidocs_agent.parsers.base import SourceParser
from apidocs_agent.parsers.java_source import JavaSourceParser

logger = logging.getLogger(__name__)


def substitute(shape: TypeShape, bindings: dict[str, TypeShape]) -> TypeShape:
    """타입 변수(T 등)를 실제 타입인자로 치환."""
    if not bindings:
        return shape
    if shape.kind is TypeKind.ARRAY and shape.component is not None:
        return TypeShape.array_of(substitute(shape.component, bindings))
    if shape.kind is TypeKind.GENERIC:
        return TypeShape.generic(shape.name, [substitute(a, bindings) for a in shape.args])
    return bindings.get(shape.name, shape)


def element_class(shape: TypeShape) -> Optional[TypeShape]:
    # 배열/컬렉션을 벗겨낸 실제 클래스. List 처럼 원소 타입이 없으면 None
    while True:
        element, is_list = split_element(shape)
        if not is_list:
            return shape
        if element is None:
            return None
        shape = element


class ResponseResolver(ABC):
    @abstractmethod
    def resolve(self, response: ResponseRecord, shape: TypeShape, source_file: Optional[Path]) -> None: ...


class DeclaredTypeResolver(ResponseResolver):
    """선언된 모양만으로 타입/클래스명을 채운다. 필드는 열거하지 않음."""

    def resolve(self, response: ResponseRecord, shape: TypeShape, source_file: Optional[Path]) -> None:
        response.type = normalize_shape(shape)
        response.class_name = shape.element.name


class SourceTreeResolver(DeclaredTypeResolver):
    """소스 루트에서 <ClassName>.java 를 찾아 필드 트리까지 채운다.

    roots 를 주지 않으면 호출마다 컨트롤러 파일의 폴더를 루트로 쓴다.
    인덱스는 루트별로, 파싱 결과는 파일별로 캐시한다.
    """

    def __init__(self, roots: Sequence[Path] = (), parser: SourceParser | None = None, max_depth: int = 4):
        self.roots = tuple(Path(r) for r in roots)
        self.parser = parser or JavaSourceParser()
        self.max_depth = max_depth
        self._indexes: dict[Path, dict[str, Path]] = {}
        self._classes: dict[tuple[Path, str], Optional[ClassDecl]] = {}

    def roots_for(self, source_file: Optional[Path]) -> tuple[Path, ...]:
        if self.roots:
            return self.roots
        return (source_file.parent,) if source_file is not None else ()

    def resolve(self, response: ResponseRecord, shape: TypeShape, source_file: Optional[Path]) -> None:
        super().resolve(response, shape, source_file)
        roots = self.roots_for(source_file)

        root = shape.element
        if response.generics:
            # 루트 타입인자는 GenericRecord 에서 다시 읽는다
            root = TypeShape.generic(root.name, [g.class_type for g in response.generics])
        response.fields = self._fields_for(root, roots, 0, frozenset())

    def _fields_for(self, shape: TypeShape, roots: tuple[Path, ...], depth: int, seen: frozenset[str]) -> list[FieldRecord]:
        target = element_class(shape)
        if target is None or depth >= self.max_depth:
            return []
        if unify_type(target.name) != OBJECT or target.name in seen:
            return []
        decl = self._load(target.name, roots)
        if decl is None:
            return []

        bindings = dict(zip(decl.type_parameters, target.args))
        out: list[FieldRecord] = []
        for f in decl.fields:
            if "static" in f.modifiers:
                continue
            ftype = substitute(f.type, bindings)
            out.append(FieldRecord(
                name=f.name,
                type=normalize_shape(ftype),
                description=f.doc.summary if f.doc else "",
                fields=self._fields_for(ftype, roots, depth + 1, seen | {decl.name}),
            ))
        return out

    def _index(self, root: Path) -> dict[str, Path]:
        root = root.resolve()
        if root not in self._indexes:
            index: dict[str, Path] = {}
            for f in sorted(root.rglob("*.java")):
                index.setdefault(f.stem, f)
            self._indexes[root] = index
        return self._indexes[root]

    def _find(self, name: str, roots: tuple[Path, ...]) -> Optional[Path]:
        for root in roots:
            path = self._index(root).get(name)
            if path is not None:
                return path
        return None

    def _load(self, name: str, roots: tuple[Path, ...]) -> Optional[ClassDecl]:
        path = self._find(name, roots)
        if path is None:
            return None
        key = (path, name)
        if key in self._classes:
            return self._classes[key]

        decl = None
        try:
            unit = self.parser.parse(path, path.read_text(encoding="utf-8", errors="ignore"))
            decl = unit.find_class(name)
        except InvalidDeclarationError as e:
            logger.debug("cannot resolve fields of %s: %s", name, e)
        self._classes[key] = decl
        return decl
