"""문서 모델 스냅샷 저장/로드 (다음 실행의 baseline)."""
from __future__ import annotations
from dataclasses import asdict
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

from apidocs_agent.model import (
    ChangeStatus,
    ControllerRecord,
    FieldRecord,
    GenericRecord,
    HeaderRecord,
    ParamRecord,
    RequestRecord,
    ResponseRecord,
)
from apidocs_agent.parsers.java_source import parse_type_string

SNAPSHOT_VERSION = 1


class ParamModel(BaseModel):
    name: str
    type: Optional[str] = None
    description: str = ""
    required: bool = False


class HeaderModel(BaseModel):
    name: str
    value: str = ""
    description: str = ""
    required: bool = True


class FieldModel(BaseModel):
    name: str
    type: str
    description: str = ""
    fields: list[FieldModel] = Field(default_factory=list)


class ResponseModel(BaseModel):
    type: str = "object"
    class_name: str = ""
    generics: list[str] = Field(default_factory=list)
    fields: list[FieldModel] = Field(default_factory=list)


class RequestModel(BaseModel):
    method_name: str
    url: str
    methods: list[str] = Field(default_factory=list)
    description: str = ""
    author: Optional[str] = None
    deprecated: bool = False
    params: list[ParamModel] = Field(default_factory=list)
    headers: list[HeaderModel] = Field(default_factory=list)
    response: Optional[ResponseModel] = None
    change_status: Optional[ChangeStatus] = None


class ControllerModel(BaseModel):
    class_name: str
    package: Optional[str] = None
    documented: bool = False
    description: Optional[str] = None
    author: Optional[str] = None
    base_url: str = ""
    requests: list[RequestModel] = Field(default_factory=list)


class SnapshotModel(BaseModel):
    version: int = SNAPSHOT_VERSION
    controllers: list[ControllerModel] = Field(default_factory=list)


def _response_model(r: ResponseRecord) -> ResponseModel:
    return ResponseModel(
        type=r.type,
        class_name=r.class_name,
        generics=[g.class_type.text for g in r.generics],
        fields=[FieldModel.model_validate(asdict(f)) for f in r.fields],
    )


def to_snapshot(controllers: list[ControllerRecord]) -> SnapshotModel:
    return SnapshotModel(controllers=[
        ControllerModel(
            class_name=c.class_name,
            package=c.package,
            documented=c.documented,
            description=c.description,
            author=c.author,
            base_url=c.base_url,
            requests=[
                RequestModel(
                    method_name=r.method_name,
                    url=r.url,
                    methods=list(r.methods),
                    description=r.description,
                    author=r.author,
                    deprecated=r.deprecated,
                    params=[ParamModel.model_validate(p) for p in r.params_json()],
                    headers=[HeaderModel.model_validate(h) for h in r.headers_json()],
                    response=_response_model(r.response) if r.response is not None else None,
                    change_status=r.change_status,
                )
                for r in c.requests
            ],
        )
        for c in controllers
    ])


def _field_record(m: FieldModel) -> FieldRecord:
    return FieldRecord(name=m.name, type=m.type, description=m.description, fields=[_field_record(f) for f in m.fields])


def _request_record(m: RequestModel) -> RequestRecord:
    request = RequestRecord(
        method_name=m.method_name,
        url=m.url,
        methods=list(m.methods),
        description=m.description,
        author=m.author,
        deprecated=m.deprecated,
        params=[ParamRecord(**p.model_dump()) for p in m.params],
        headers=[HeaderRecord(**h.model_dump()) for h in m.headers],
        change_status=m.change_status,
    )
    if m.response is not None:
        request.response = ResponseRecord(
            request=request,
            type=m.response.type,
            class_name=m.response.class_name,
            generics=[GenericRecord(from_file=None, class_type=parse_type_string(g)) for g in m.response.generics],
            fields=[_field_record(f) for f in m.response.fields],
        )
    return request


def from_snapshot(snapshot: SnapshotModel) -> list[ControllerRecord]:
    controllers = []
    for cm in snapshot.controllers:
        c = ControllerRecord(
            class_name=cm.class_name,
            package=cm.package,
            documented=cm.documented,
            description=cm.description,
            author=cm.author,
            base_url=cm.base_url,
        )
        for rm in cm.requests:
            c.add_request(_request_record(rm))
        controllers.append(c)
    return controllers


def save_snapshot(controllers: list[ControllerRecord], out_path: Path) -> Path:
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(to_snapshot(controllers).model_dump_json(indent=2), encoding="utf-8")
    return out_path


def load_snapshot(path: Path) -> list[ControllerRecord]:
    if not path.exists():
        return []
    data = path.read_text(encoding="utf-8")
    return from_snapshot(SnapshotModel.model_validate_json(data))
