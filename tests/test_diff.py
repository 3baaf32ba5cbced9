from pathlib import Path

from apidocs_agent.controller_parser import ControllerParser
from apidocs_agent.diff import classify_change, duplicate_urls, find_previous
from apidocs_agent.extensions.spring import SpringExtension
from apidocs_agent.model import (
    ChangeStatus,
    ControllerRecord,
    HeaderRecord,
    ParamRecord,
    RequestRecord,
    ResponseRecord,
)

FIXTURES = Path(__file__).parent / "fixtures"
SHOP = FIXTURES / "shop" / "src" / "main" / "java" / "com" / "example" / "shop"


def _request(url="/widgets", methods=("GET",), **kwargs) -> RequestRecord:
    r = RequestRecord(method_name="list", url=url, methods=list(methods), **kwargs)
    r.response = ResponseRecord(request=r, type="object", class_name="WidgetDTO")
    return r


def _baseline(*requests: RequestRecord) -> list[ControllerRecord]:
    c = ControllerRecord(class_name="WidgetController")
    for r in requests:
        c.add_request(r)
    return [c]


class TestClassifyChange:
    def test_new_without_baseline(self):
        r = classify_change(_request(), None)
        assert r.change_status is ChangeStatus.NEW
        assert r.previous is None

    def test_new_when_url_not_in_baseline(self):
        r = classify_change(_request(url="/other"), _baseline(_request()))
        assert r.change_status is ChangeStatus.NEW

    def test_unchanged(self):
        previous = _request()
        r = classify_change(_request(), _baseline(previous))
        assert r.change_status is ChangeStatus.UNCHANGED
        assert r.previous is previous

    def test_added_method_is_unchanged(self):
        r = classify_change(_request(methods=("GET", "POST")), _baseline(_request()))
        assert r.change_status is ChangeStatus.UNCHANGED

    def test_removed_method_is_modified(self):
        r = classify_change(_request(methods=("GET",)), _baseline(_request(methods=("GET", "POST"))))
        assert r.change_status is ChangeStatus.MODIFIED

    def test_param_change_is_modified(self):
        previous = _request(params=[ParamRecord(name="page", type="int")])
        current = _request(params=[ParamRecord(name="page", type="long")])
        assert classify_change(current, _baseline(previous)).change_status is ChangeStatus.MODIFIED

    def test_header_change_is_modified(self):
        previous = _request(headers=[HeaderRecord(name="X-Token")])
        current = _request(headers=[HeaderRecord(name="X-Token", required=False)])
        assert classify_change(current, _baseline(previous)).change_status is ChangeStatus.MODIFIED

    def test_response_change_is_modified(self):
        previous = _request()
        current = _request()
        current.response.class_name = "UserDTO"
        assert classify_change(current, _baseline(previous)).change_status is ChangeStatus.MODIFIED

    def test_description_change_is_ignored(self):
        previous = _request(description="old")
        current = _request(description="new")
        assert classify_change(current, _baseline(previous)).change_status is ChangeStatus.UNCHANGED


class TestBaseline:
    def test_first_match_wins(self):
        first = _request()
        second = _request()
        assert find_previous(_request(), _baseline(first, second)) is first
        assert duplicate_urls(_baseline(first, second)) == ["/widgets"]

    def test_same_url_prefers_matching_method(self):
        listing = _request(methods=("GET",))
        creating = _request(methods=("POST",))
        baseline = _baseline(listing, creating)

        current = _request(methods=("POST",))
        assert find_previous(current, baseline) is creating
        assert classify_change(current, baseline).change_status is ChangeStatus.UNCHANGED
        assert duplicate_urls(baseline) == []

    def test_same_url_without_shared_method_falls_back_to_first(self):
        listing = _request(methods=("GET",))
        creating = _request(methods=("POST",))
        current = _request(methods=("DELETE",))
        assert find_previous(current, _baseline(listing, creating)) is listing
        assert classify_change(current, _baseline(listing, creating)).change_status is ChangeStatus.MODIFIED

    def test_reextraction_against_itself_is_unchanged(self):
        source = SHOP / "WidgetController.java"
        first = ControllerParser(auto_generate=False).parse(source)
        second = ControllerParser(auto_generate=False, baseline=[first]).parse(source)
        assert second.requests
        assert all(r.change_status is ChangeStatus.UNCHANGED for r in second.requests)

    def test_spring_reextraction_against_itself_is_unchanged(self):
        # list(GET) 와 create(POST) 가 같은 url 을 쓴다
        source = SHOP / "WidgetController.java"
        first = ControllerParser(auto_generate=False, extensions=[SpringExtension()]).parse(source)
        second = ControllerParser(auto_generate=False, baseline=[first], extensions=[SpringExtension()]).parse(source)
        assert [(r.method_name, r.change_status) for r in second.requests] == [
            ("list", ChangeStatus.UNCHANGED),
            ("get", ChangeStatus.UNCHANGED),
            ("create", ChangeStatus.UNCHANGED),
        ]
        assert second.request("create").previous is first.request("create")

    def test_duplicate_baseline_urls_are_logged(self, caplog):
        with caplog.at_level("WARNING", logger="apidocs_agent.controller_parser"):
            ControllerParser(auto_generate=False, baseline=_baseline(_request(), _request()))
        assert "/widgets" in caplog.text
