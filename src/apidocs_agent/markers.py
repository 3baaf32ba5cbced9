"""메서드의 @ApiDoc 마커 해석: 응답 타입 / url / HTTP method override."""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional

from apidocs_agent.declaration import Marker, MarkerValue, MarkerValueKind, TypeShape
from apidocs_agent.errors import MalformedMarkerError
from apidocs_agent.model import RequestRecord

RESULT_KEYS = ("result", "value")


@dataclass
class MarkerOverride:
    result_type: Optional[TypeShape] = None
    url: Optional[str] = None
    methods: list[str] = field(default_factory=list)


def _describe(value: MarkerValue) -> str:
    if value.kind is MarkerValueKind.ARRAY:
        return "array"
    return f"{value.kind.value} {value.text!r}"


def _type_ref(key: str, value: MarkerValue) -> TypeShape:
    if value.kind is not MarkerValueKind.TYPE or value.shape is None:
        raise MalformedMarkerError(key, "a class reference", _describe(value))
    return value.shape


def _string(key: str, value: MarkerValue) -> str:
    if value.kind is not MarkerValueKind.STRING:
        raise MalformedMarkerError(key, "a string", _describe(value))
    return value.text


def _strings(key: str, value: MarkerValue) -> list[str]:
    if value.kind is MarkerValueKind.ARRAY:
        return [_string(key, v) for v in value.items]
    return [_string(key, value)]


def resolve_marker(marker: Optional[Marker]) -> MarkerOverride:
    override = MarkerOverride()
    if marker is None:
        return override

    if marker.is_single:
        override.result_type = _type_ref("value", marker.value)
        return override

    for key, value in marker.pairs:
        if key in RESULT_KEYS:
            override.result_type = _type_ref(key, value)
        elif key == "url":
            override.url = _string(key, value)
        elif key == "method":
            # 여러 번 나오면 누적
            override.methods.extend(_strings(key, value))
    return override


def apply_override(request: RequestRecord, override: MarkerOverride) -> RequestRecord:
    if override.url is not None:
        request.url = override.url
    for m in override.methods:
        request.add_method(m)
    return request
