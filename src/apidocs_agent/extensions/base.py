from __future__ import annotations
from apidocs_agent.declaration import ClassDecl, MethodDecl
from apidocs_agent.model import ControllerRecord, RequestRecord


class ParserExtension:
    """프레임워크별 관례를 코어 수정 없이 얹기 위한 hook. 필요한 것만 override."""

    def before_controller(self, controller: ControllerRecord, decl: ClassDecl) -> None:
        pass

    def after_controller(self, controller: ControllerRecord, decl: ClassDecl) -> None:
        pass

    def after_method(self, request: RequestRecord, decl: MethodDecl) -> None:
        pass
