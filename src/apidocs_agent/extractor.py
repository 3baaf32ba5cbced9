"""public 메서드 -> RequestRecord.

단계마다 RequestRecord 를 받아 채운 뒤 그대로 돌려준다. 우선순위는 단계 순서로 정해진다:
  기본값(메서드명) -> @Deprecated -> javadoc -> 시그니처 추론 -> @ApiDoc 마커 -> extension hook
ParamRecord.type 만은 예외로, 처음 값을 쓴 쪽(param 태그의 {type})이 이긴다.
"""
from __future__ import annotations
import logging
import re
from pathlib import Path
from typing import Iterable, Optional, Sequence

from apidocs_agent.declaration import DocComment, MethodDecl, ParamDecl, TypeKind, TypeShape
from apidocs_agent.diff import classify_change
from apidocs_agent.errors import MalformedMarkerError, UnresolvedResponseTypeError
from apidocs_agent.extensions.base import ParserExtension
from apidocs_agent.markers import MarkerOverride, apply_override, resolve_marker
from apidocs_agent.model import ControllerRecord, GenericRecord, RequestRecord, ResponseRecord
from apidocs_agent.normalize import normalize_shape, normalize_type
from apidocs_agent.reader import DOC_MARKER
from apidocs_agent.resolver import DeclaredTypeResolver, ResponseResolver

logger = logging.getLogger(__name__)

DEPRECATED_MARKER = "Deprecated"

# @param ids {int[]} 설명
PARAM_TYPE_RE = re.compile(r"^\{([^}]+)\}\s*(.*)$", re.DOTALL)


def split_param_type(content: str) -> tuple[Optional[str], str]:
    m = PARAM_TYPE_RE.match(content or "")
    if not m:
        return None, content
    return m.group(1).strip(), m.group(2).strip()


def init_request(controller: ControllerRecord, method: MethodDecl) -> RequestRecord:
    return RequestRecord(
        method_name=method.name,
        url=method.name,
        description=method.name,
        author=controller.author,
        controller=controller,
    )


def apply_deprecation(request: RequestRecord, method: MethodDecl) -> RequestRecord:
    if method.marker(DEPRECATED_MARKER) is not None:
        request.deprecated = True
    return request


def apply_doc_comment(request: RequestRecord, doc: Optional[DocComment]) -> RequestRecord:
    if doc is None:
        return request
    if doc.summary:
        request.description = doc.summary

    for tag in doc.tags:
        if tag.name == "param" and tag.arg:
            param = request.ensure_param(tag.arg)
            declared, text = split_param_type(tag.content)
            if declared:
                param.assign_type(normalize_type(declared))
            param.description = text
        elif tag.name == "author":
            request.author = tag.content
        elif tag.name == "deprecated":
            request.deprecated = True
    return request


def response_type(method: MethodDecl, override: MarkerOverride) -> TypeShape:
    if override.result_type is not None:
        return override.result_type
    if method.return_type is not None:
        return method.return_type
    raise UnresolvedResponseTypeError(method.name)


class MemberExtractor:
    def __init__(
        self,
        *,
        auto_generate: bool = False,
        excluded_types: Iterable[str] = (),
        extensions: Sequence[ParserExtension] = (),
        resolver: ResponseResolver | None = None,
        baseline: Sequence[ControllerRecord] | None = None,
    ):
        self.auto_generate = auto_generate
        self.excluded_types = set(excluded_types)
        self.extensions = list(extensions)
        self.resolver = resolver or DeclaredTypeResolver()
        self.baseline = baseline

    def is_eligible(self, controller: ControllerRecord, method: MethodDecl) -> bool:
        return method.marker(DOC_MARKER) is not None or controller.documented or self.auto_generate

    def is_excluded(self, param: ParamDecl) -> bool:
        return param.type.element.name in self.excluded_types

    def extract(self, controller: ControllerRecord, methods: Iterable[MethodDecl], source_file: Optional[Path] = None) -> ControllerRecord:
        for method in methods:
            if not method.is_public or not self.is_eligible(controller, method):
                continue
            try:
                request = self.build_request(controller, method, source_file)
            except MalformedMarkerError as e:
                logger.warning("skip %s.%s: %s", controller.class_name, method.name, e)
                continue
            except UnresolvedResponseTypeError as e:
                logger.debug("skip %s.%s: %s", controller.class_name, method.name, e)
                continue
            controller.add_request(request)
        return controller

    def build_request(self, controller: ControllerRecord, method: MethodDecl, source_file: Optional[Path] = None) -> RequestRecord:
        request = init_request(controller, method)
        request = apply_deprecation(request, method)
        request = apply_doc_comment(request, method.doc)
        request = self.apply_signature(request, method)

        override = resolve_marker(method.marker(DOC_MARKER))
        request = apply_override(request, override)

        for ext in self.extensions:
            ext.after_method(request, method)

        request.response = self.build_response(request, response_type(method, override), source_file)
        return classify_change(request, self.baseline)

    def apply_signature(self, request: RequestRecord, method: MethodDecl) -> RequestRecord:
        for p in method.parameters:
            record = request.param(p.name)
            if record is None:
                # param 태그로 언급되지 않은 파라미터는 추적하지 않는다
                continue
            if self.is_excluded(p):
                request.remove_param(p.name)
                continue
            record.assign_type(normalize_shape(p.type))
        return request

    def build_response(self, request: RequestRecord, shape: TypeShape, source_file: Optional[Path]) -> ResponseRecord:
        response = ResponseRecord(request=request)
        root = shape.element
        if root.kind is TypeKind.GENERIC:
            for arg in root.args:
                response.add_generic(GenericRecord(from_file=source_file, class_type=arg))
        self.resolver.resolve(response, shape, source_file)
        return response
