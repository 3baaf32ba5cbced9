from __future__ import annotations
from dataclasses import dataclass, field, asdict
from enum import Enum
from pathlib import Path
from typing import Optional, Any

from apidocs_agent.declaration import TypeShape


class ChangeStatus(str, Enum):
    NEW = "NEW"
    MODIFIED = "MODIFIED"
    UNCHANGED = "UNCHANGED"


@dataclass
class ParamRecord:
    name: str
    type: Optional[str] = None
    description: str = ""
    required: bool = False

    def assign_type(self, canonical: str) -> bool:
        # 처음 쓴 값이 이긴다. 이미 있으면 덮어쓰지 않음
        if self.type is not None:
            return False
        self.type = canonical
        return True


@dataclass
class HeaderRecord:
    name: str
    value: str = ""
    description: str = ""
    required: bool = True


@dataclass
class FieldRecord:
    name: str
    type: str
    description: str = ""
    fields: list["FieldRecord"] = field(default_factory=list)


@dataclass
class GenericRecord:
    from_file: Optional[Path]
    class_type: TypeShape


@dataclass
class ResponseRecord:
    request: Optional["RequestRecord"] = field(default=None, repr=False, compare=False)
    type: str = "object"
    class_name: str = ""
    generics: list[GenericRecord] = field(default_factory=list)
    fields: list[FieldRecord] = field(default_factory=list)

    def add_generic(self, generic: GenericRecord) -> None:
        self.generics.append(generic)

    def to_api_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "className": self.class_name,
            "generics": [g.class_type.text for g in self.generics],
            "fields": [asdict(f) for f in self.fields],
        }


@dataclass
class RequestRecord:
    method_name: str
    url: str = ""
    methods: list[str] = field(default_factory=list)
    description: str = ""
    author: Optional[str] = None
    deprecated: bool = False
    params: list[ParamRecord] = field(default_factory=list)
    headers: list[HeaderRecord] = field(default_factory=list)
    response: Optional[ResponseRecord] = None
    controller: Optional["ControllerRecord"] = field(default=None, repr=False, compare=False)
    previous: Optional["RequestRecord"] = field(default=None, repr=False, compare=False)
    change_status: Optional[ChangeStatus] = None

    def add_method(self, token: str) -> None:
        token = token.strip().upper()
        if token and token not in self.methods:
            self.methods.append(token)

    def param(self, name: str) -> Optional[ParamRecord]:
        for p in self.params:
            if p.name == name:
                return p
        return None

    def ensure_param(self, name: str) -> ParamRecord:
        p = self.param(name)
        if p is None:
            p = ParamRecord(name=name)
            self.params.append(p)
        return p

    def remove_param(self, name: str) -> Optional[ParamRecord]:
        p = self.param(name)
        if p is not None:
            self.params.remove(p)
        return p

    def params_json(self) -> list[dict[str, Any]]:
        return [asdict(p) for p in self.params]

    def headers_json(self) -> list[dict[str, Any]]:
        return [asdict(h) for h in self.headers]


@dataclass
class ControllerRecord:
    class_name: str
    package: Optional[str] = None
    documented: bool = False
    description: Optional[str] = None
    author: Optional[str] = None
    base_url: str = ""
    requests: list[RequestRecord] = field(default_factory=list)

    def add_request(self, request: RequestRecord) -> None:
        request.controller = self
        self.requests.append(request)

    def request(self, method_name: str) -> Optional[RequestRecord]:
        for r in self.requests:
            if r.method_name == method_name:
                return r
        return None
