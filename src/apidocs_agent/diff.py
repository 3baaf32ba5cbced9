"""이전 스냅샷과 비교해 RequestRecord 의 변경 상태(NEW/MODIFIED/UNCHANGED)를 정한다."""
from __future__ import annotations
from collections import Counter
from typing import Any, Optional, Sequence

from apidocs_agent.model import ChangeStatus, ControllerRecord, RequestRecord


def _shares_method(previous: RequestRecord, request: RequestRecord) -> bool:
    if not previous.methods and not request.methods:
        return True
    return any(m in request.methods for m in previous.methods)


def find_previous(request: RequestRecord, baseline: Sequence[ControllerRecord] | None) -> Optional[RequestRecord]:
    # 같은 url 중 HTTP method 가 겹치는 요청 우선, 없으면 첫 번째 (입력 순서대로)
    first = None
    for controller in baseline or []:
        for previous in controller.requests:
            if previous.url != request.url:
                continue
            if _shares_method(previous, request):
                return previous
            if first is None:
                first = previous
    return first


def duplicate_urls(baseline: Sequence[ControllerRecord] | None) -> list[str]:
    # url 과 method 집합이 모두 같아 구분할 수 없는 요청
    counts = Counter((r.url, frozenset(r.methods)) for c in (baseline or []) for r in c.requests)
    return sorted({url for (url, _), n in counts.items() if n > 1})


def _response_json(request: RequestRecord) -> Optional[dict[str, Any]]:
    return request.response.to_api_dict() if request.response is not None else None


def is_same_request(current: RequestRecord, previous: RequestRecord) -> bool:
    for method in previous.methods:
        if method not in current.methods:
            return False

    return (
        current.params_json() == previous.params_json()
        and current.headers_json() == previous.headers_json()
        and _response_json(current) == _response_json(previous)
    )


def classify_change(request: RequestRecord, baseline: Sequence[ControllerRecord] | None) -> RequestRecord:
    previous = find_previous(request, baseline)
    if previous is None:
        request.previous = None
        request.change_status = ChangeStatus.NEW
        return request

    request.previous = previous
    request.change_status = ChangeStatus.UNCHANGED if is_same_request(request, previous) else ChangeStatus.MODIFIED
    return request
