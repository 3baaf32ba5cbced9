"""소스 파서가 만들어 주는 선언 트리 (언어 중립)."""
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class TypeKind(str, Enum):
    SCALAR = "scalar"
    ARRAY = "array"
    GENERIC = "generic"


@dataclass(frozen=True)
class TypeShape:
    """선언된 타입의 모양. 이름은 패키지를 뗀 simple name."""
    kind: TypeKind
    name: str = ""
    args: tuple["TypeShape", ...] = ()
    component: Optional["TypeShape"] = None

    @classmethod
    def scalar(cls, name: str) -> "TypeShape":
        return cls(TypeKind.SCALAR, name)

    @classmethod
    def generic(cls, name: str, args: list["TypeShape"] | tuple["TypeShape", ...]) -> "TypeShape":
        if not args:
            return cls.scalar(name)
        return cls(TypeKind.GENERIC, name, tuple(args))

    @classmethod
    def array_of(cls, component: "TypeShape", dimensions: int = 1) -> "TypeShape":
        shape = component
        for _ in range(dimensions):
            shape = cls(TypeKind.ARRAY, component=shape)
        return shape

    @property
    def element(self) -> "TypeShape":
        # 배열 차원을 모두 벗긴 타입
        shape = self
        while shape.kind is TypeKind.ARRAY and shape.component is not None:
            shape = shape.component
        return shape

    @property
    def text(self) -> str:
        if self.kind is TypeKind.ARRAY:
            inner = self.component.text if self.component is not None else "Object"
            return f"{inner}[]"
        if self.kind is TypeKind.GENERIC:
            return f"{self.name}<{', '.join(a.text for a in self.args)}>"
        return self.name


class MarkerValueKind(str, Enum):
    TYPE = "type"        # Foo.class
    STRING = "string"    # "GET"
    ARRAY = "array"      # {"GET", "POST"}
    OTHER = "other"      # RequestMethod.GET, 숫자, boolean 등


@dataclass
class MarkerValue:
    kind: MarkerValueKind
    text: str = ""
    shape: Optional[TypeShape] = None
    items: list["MarkerValue"] = field(default_factory=list)


@dataclass
class Marker:
    """annotation 같은 명시적 마커. value(단일 값) 또는 pairs(key=value) 중 하나."""
    name: str
    value: Optional[MarkerValue] = None
    pairs: list[tuple[str, MarkerValue]] = field(default_factory=list)

    @property
    def is_single(self) -> bool:
        return self.value is not None

    def get(self, key: str) -> Optional[MarkerValue]:
        for k, v in self.pairs:
            if k == key:
                return v
        return None


@dataclass
class DocTag:
    name: str
    content: str = ""
    arg: Optional[str] = None   # @param 의 파라미터 이름


@dataclass
class DocComment:
    summary: str = ""
    tags: list[DocTag] = field(default_factory=list)

    def first(self, name: str) -> Optional[DocTag]:
        for t in self.tags:
            if t.name == name:
                return t
        return None


def find_marker(markers: list[Marker], name: str) -> Optional[Marker]:
    for m in markers:
        if m.name == name:
            return m
    return None


@dataclass
class ParamDecl:
    name: str
    type: TypeShape
    markers: list[Marker] = field(default_factory=list)


@dataclass
class FieldDecl:
    name: str
    type: TypeShape
    modifiers: set[str] = field(default_factory=set)
    doc: Optional[DocComment] = None


@dataclass
class MethodDecl:
    name: str
    modifiers: set[str] = field(default_factory=set)
    markers: list[Marker] = field(default_factory=list)
    doc: Optional[DocComment] = None
    parameters: list[ParamDecl] = field(default_factory=list)
    return_type: Optional[TypeShape] = None   # void 이면 None

    @property
    def is_public(self) -> bool:
        return "public" in self.modifiers

    def marker(self, name: str) -> Optional[Marker]:
        return find_marker(self.markers, name)


@dataclass
class ClassDecl:
    name: str
    package: Optional[str] = None
    markers: list[Marker] = field(default_factory=list)
    doc: Optional[DocComment] = None
    methods: list[MethodDecl] = field(default_factory=list)
    fields: list[FieldDecl] = field(default_factory=list)
    type_parameters: list[str] = field(default_factory=list)

    def marker(self, name: str) -> Optional[Marker]:
        return find_marker(self.markers, name)


@dataclass
class SourceUnit:
    package: Optional[str] = None
    classes: list[ClassDecl] = field(default_factory=list)

    def find_class(self, name: str) -> Optional[ClassDecl]:
        for c in self.classes:
            if c.name == name:
                return c
        return None
