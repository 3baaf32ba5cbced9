"""선언 타입 -> 문서용 canonical 타입."""
from __future__ import annotations
from typing import Optional

from apidocs_agent.declaration import TypeKind, TypeShape
from apidocs_agent.parsers.java_source import parse_type_string

LIST_SUFFIX = "[]"
OBJECT = "object"
LIST_PLACEHOLDER = OBJECT + LIST_SUFFIX

JAVA_TYPE_MAP = {
    "byte": "int",
    "Byte": "int",
    "short": "int",
    "Short": "int",
    "int": "int",
    "Integer": "int",
    "BigInteger": "int",
    "long": "long",
    "Long": "long",
    "float": "float",
    "Float": "float",
    "double": "double",
    "Double": "double",
    "BigDecimal": "double",
    "boolean": "boolean",
    "Boolean": "boolean",
    "char": "string",
    "Character": "string",
    "String": "string",
    "CharSequence": "string",
    "UUID": "string",
    "Date": "date",
    "LocalDate": "date",
    "LocalDateTime": "date",
    "LocalTime": "date",
    "ZonedDateTime": "date",
    "OffsetDateTime": "date",
    "Instant": "date",
    "Timestamp": "date",
    "File": "file",
    "MultipartFile": "file",
}

# canonical 이름 자체도 자기 자신으로 (idempotent)
CANONICAL_TYPES = {"int", "long", "float", "double", "boolean", "string", "date", "file", OBJECT}

COLLECTION_TYPES = {
    "List", "ArrayList", "LinkedList",
    "Set", "HashSet", "LinkedHashSet", "TreeSet", "SortedSet",
    "Collection", "Iterable", "Queue", "Deque", "Vector", "Stack",
}


def unify_type(name: str) -> str:
    simple = (name or "").rsplit(".", 1)[-1]
    if simple in CANONICAL_TYPES:
        return simple
    return JAVA_TYPE_MAP.get(simple, OBJECT)


def is_collection(shape: TypeShape) -> bool:
    return shape.kind is not TypeKind.ARRAY and shape.name in COLLECTION_TYPES


def split_element(shape: TypeShape) -> tuple[Optional[TypeShape], bool]:
    """(원소 타입, list 여부).

    배열은 component, 컬렉션은 첫 번째 타입인자 (없으면 None = placeholder),
    그 외는 자기 자신.
    """
    if shape.kind is TypeKind.ARRAY:
        return shape.component, True
    if is_collection(shape):
        return (shape.args[0] if shape.args else None), True
    return shape, False


def normalize_shape(shape: TypeShape) -> str:
    element, is_list = split_element(shape)
    if not is_list:
        return unify_type(shape.name)
    if element is None:
        return LIST_PLACEHOLDER
    return normalize_shape(element) + LIST_SUFFIX


def normalize_type(raw: str) -> str:
    return normalize_shape(parse_type_string(raw))
