from pathlib import Path

import pytest

from apidocs_agent.controller_parser import ControllerParser
from apidocs_agent.extensions.spring import SpringExtension, join_url

FIXTURES = Path(__file__).parent / "fixtures"
SHOP = FIXTURES / "shop" / "src" / "main" / "java" / "com" / "example" / "shop"


def _parser() -> ControllerParser:
    return ControllerParser(
        auto_generate=False,
        excluded_param_types=["HttpServletRequest"],
        extensions=[SpringExtension()],
    )


@pytest.fixture(scope="module")
def widgets():
    return _parser().parse(SHOP / "WidgetController.java")


class TestWidgetController:
    def test_class_metadata(self, widgets):
        assert widgets.class_name == "WidgetController"
        assert widgets.package == "com.example.shop"
        assert widgets.documented is True
        assert widgets.description == "Widget management endpoints"
        assert widgets.author == "alice"
        assert widgets.base_url == "/api/widgets"

    def test_public_non_void_methods_only(self, widgets):
        # delete 는 void 라 응답 타입이 없고, audit 은 private
        assert [r.method_name for r in widgets.requests] == ["list", "get", "create"]

    def test_list(self, widgets):
        r = widgets.request("list")
        assert r.url == "/api/widgets"
        assert r.methods == ["GET"]
        assert r.description == "List widgets"
        assert r.author == "alice"
        assert [p.name for p in r.params] == ["page"]
        assert r.param("page").type == "int"
        assert r.param("page").required is False

    def test_get_path_variable_and_header(self, widgets):
        r = widgets.request("get")
        assert r.url == "/api/widgets/{id}"
        assert r.methods == ["GET"]
        assert r.param("id").type == "long"
        assert r.param("id").required is True
        assert r.param("token") is None
        assert len(r.headers) == 1
        header = r.headers[0]
        assert header.name == "X-Token"
        assert header.description == "auth token"
        assert header.required is True

    def test_create_request_body(self, widgets):
        r = widgets.request("create")
        assert r.url == "/api/widgets"
        assert r.methods == ["POST"]
        assert r.param("widget").type == "object"
        assert r.param("widget").required is True
        assert r.response.class_name == "ApiResult"
        assert [g.class_type.text for g in r.response.generics] == ["WidgetDTO"]


class TestMarkerPrecedence:
    def test_api_doc_url_and_method_are_kept(self):
        c = _parser().parse_source("""
@RequestMapping("/base")
public class DemoController {
    @ApiDoc(url = "/custom", method = "PUT")
    @PostMapping("/ignored")
    public String save() { return ""; }
}
""", "DemoController")
        r = c.request("save")
        assert r.url == "/custom"
        assert r.methods == ["PUT"]

    def test_request_mapping_method_constant(self):
        c = _parser().parse_source("""
@ApiDoc
@RequestMapping(value = "/base")
public class DemoController {
    @RequestMapping(value = "/items", method = {RequestMethod.POST, RequestMethod.PUT})
    public String save() { return ""; }
}
""", "DemoController")
        r = c.request("save")
        assert r.url == "/base/items"
        assert r.methods == ["POST", "PUT"]

    def test_header_with_default_is_optional(self):
        c = _parser().parse_source("""
@ApiDoc
public class DemoController {
    @GetMapping(path = "/lang")
    public String lang(@RequestHeader(name = "Accept-Language", defaultValue = "en") String lang) { return ""; }
}
""", "DemoController")
        r = c.request("lang")
        assert r.url == "/lang"
        assert r.params == []
        header = r.headers[0]
        assert header.name == "Accept-Language"
        assert header.value == "en"
        assert header.required is False

    def test_request_param_with_default_is_optional(self):
        c = _parser().parse_source("""
@ApiDoc
public class DemoController {
    /**
     * @param size page size
     * @param q query
     */
    @GetMapping("/search")
    public String search(@RequestParam(defaultValue = "20") int size, @RequestParam String q) { return ""; }
}
""", "DemoController")
        r = c.request("search")
        assert r.param("size").required is False
        assert r.param("q").required is True


class TestJoinUrl:
    @pytest.mark.parametrize("base, path, expected", [
        ("/api", "/items", "/api/items"),
        ("api/", "items/", "/api/items"),
        ("", "/items", "/items"),
        ("/api", "", "/api"),
        ("", "", "/"),
    ])
    def test_join(self, base, path, expected):
        assert join_url(base, path) == expected
