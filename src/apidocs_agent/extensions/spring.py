"""Spring MVC 관례: @RequestMapping/@GetMapping 등으로 url/method, @RequestHeader 로 header."""
from __future__ import annotations
from typing import Optional

from apidocs_agent.declaration import ClassDecl, Marker, MarkerValue, MarkerValueKind, MethodDecl
from apidocs_agent.extensions.base import ParserExtension
from apidocs_agent.model import ControllerRecord, HeaderRecord, RequestRecord

REQUEST_MAPPING = "RequestMapping"
MAPPING_METHODS = {
    "GetMapping": "GET",
    "PostMapping": "POST",
    "PutMapping": "PUT",
    "DeleteMapping": "DELETE",
    "PatchMapping": "PATCH",
}
REQUIRED_PARAM_MARKERS = ("PathVariable", "RequestBody")


def _texts(value: Optional[MarkerValue]) -> list[str]:
    if value is None:
        return []
    if value.kind is MarkerValueKind.ARRAY:
        return [t for v in value.items for t in _texts(v)]
    return [value.text] if value.text else []


def _main_value(marker: Marker, *keys: str) -> Optional[MarkerValue]:
    if marker.is_single:
        return marker.value
    for key in keys:
        v = marker.get(key)
        if v is not None:
            return v
    return None


def _is_false(marker: Marker, key: str) -> bool:
    v = marker.get(key)
    return v is not None and v.text.lower() == "false"


def join_url(base: str, path: str) -> str:
    parts = [p.strip("/") for p in (base, path) if p and p.strip("/")]
    return "/" + "/".join(parts)


def mapping_marker(decl: MethodDecl) -> Optional[Marker]:
    for m in decl.markers:
        if m.name == REQUEST_MAPPING or m.name in MAPPING_METHODS:
            return m
    return None


class SpringExtension(ParserExtension):
    def before_controller(self, controller: ControllerRecord, decl: ClassDecl) -> None:
        m = decl.marker(REQUEST_MAPPING)
        if m is None:
            return
        paths = _texts(_main_value(m, "value", "path"))
        controller.base_url = paths[0] if paths else ""

    def after_method(self, request: RequestRecord, decl: MethodDecl) -> None:
        self._apply_mapping(request, decl)
        self._apply_params(request, decl)

    def _apply_mapping(self, request: RequestRecord, decl: MethodDecl) -> None:
        m = mapping_marker(decl)
        if m is None:
            return

        # @ApiDoc 이 url/method 를 이미 정했으면 그대로 둔다
        if request.url == request.method_name:
            paths = _texts(_main_value(m, "value", "path"))
            base = request.controller.base_url if request.controller is not None else ""
            request.url = join_url(base, paths[0] if paths else "")

        if not request.methods:
            if m.name in MAPPING_METHODS:
                request.add_method(MAPPING_METHODS[m.name])
            else:
                for text in _texts(m.get("method")):
                    # RequestMethod.GET -> GET
                    request.add_method(text.rsplit(".", 1)[-1])

    def _apply_params(self, request: RequestRecord, decl: MethodDecl) -> None:
        for p in decl.parameters:
            header = next((m for m in p.markers if m.name == "RequestHeader"), None)
            if header is not None:
                names = _texts(_main_value(header, "value", "name"))
                default = _texts(header.get("defaultValue"))
                removed = request.remove_param(p.name)
                request.headers.append(HeaderRecord(
                    name=names[0] if names else p.name,
                    value=default[0] if default else "",
                    description=removed.description if removed else "",
                    required=not _is_false(header, "required") and not default,
                ))
                continue

            record = request.param(p.name)
            if record is None:
                continue
            if any(m.name in REQUIRED_PARAM_MARKERS for m in p.markers):
                record.required = True
                continue
            rp = next((m for m in p.markers if m.name == "RequestParam"), None)
            if rp is not None:
                record.required = not _is_false(rp, "required") and rp.get("defaultValue") is None
