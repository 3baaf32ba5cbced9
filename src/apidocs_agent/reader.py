"""클래스 선언 -> ControllerRecord 메타데이터 (package, documented, description, author)."""
from __future__ import annotations
from typing import Callable, Optional

from apidocs_agent.declaration import ClassDecl
from apidocs_agent.model import ControllerRecord

DOC_MARKER = "ApiDoc"


def _description_tag(c: ClassDecl) -> Optional[str]:
    tag = c.doc.first("description") if c.doc else None
    return tag.content if tag else None


def _summary(c: ClassDecl) -> Optional[str]:
    return c.doc.summary if c.doc and c.doc.summary else None


def _class_name(c: ClassDecl) -> Optional[str]:
    return c.name


# 위에서부터 처음으로 값이 나오는 쪽을 쓴다
DESCRIPTION_CHAIN: list[Callable[[ClassDecl], Optional[str]]] = [
    _description_tag,
    _summary,
    _class_name,
]


def first_of(chain, decl) -> Optional[str]:
    for source in chain:
        value = source(decl)
        if value is not None:
            return value
    return None


def read_class_metadata(controller: ControllerRecord, decl: ClassDecl) -> ControllerRecord:
    controller.package = decl.package
    controller.documented = decl.marker(DOC_MARKER) is not None
    controller.description = first_of(DESCRIPTION_CHAIN, decl)

    author = decl.doc.first("author") if decl.doc else None
    controller.author = author.content if author else None
    return controller
