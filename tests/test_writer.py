from apidocs_agent.model import (
    ChangeStatus,
    ControllerRecord,
    FieldRecord,
    HeaderRecord,
    ParamRecord,
    RequestRecord,
    ResponseRecord,
)
from apidocs_agent.writer import to_markdown, write_markdown


def _controllers() -> list[ControllerRecord]:
    c = ControllerRecord(class_name="WidgetController", package="com.example", description="Widgets", author="alice")
    r = RequestRecord(
        method_name="get",
        url="/widgets/{id}",
        methods=["GET"],
        description="Get a widget",
        params=[ParamRecord(name="id", type="long", description="widget id", required=True)],
        headers=[HeaderRecord(name="X-Token", description="auth token")],
        change_status=ChangeStatus.MODIFIED,
    )
    r.response = ResponseRecord(
        request=r,
        class_name="WidgetDTO",
        fields=[FieldRecord(name="owner", type="object", fields=[FieldRecord(name="name", type="string")])],
    )
    c.add_request(r)
    c.add_request(RequestRecord(method_name="ping", url="ping", description="ping", deprecated=True, change_status=ChangeStatus.UNCHANGED))
    return [c, ControllerRecord(class_name="EmptyController")]


class TestMarkdown:
    def test_summary(self):
        md = to_markdown(_controllers())
        assert "- Controllers: 2" in md
        assert "- Total requests: 2" in md
        assert "- New or modified: 1" in md

    def test_request_sections(self):
        md = to_markdown(_controllers())
        assert "## Widgets" in md
        assert "`com.example.WidgetController` · author: alice" in md
        assert "### `GET` `/widgets/{id}` ✏️ MODIFIED" in md
        assert "| `id` | long | Yes | widget id |" in md
        assert "| `X-Token` | - | Yes | auth token |" in md
        assert "**Response:** `WidgetDTO` (object)" in md
        assert "- `owner`: object" in md
        assert "  - `name`: string" in md

    def test_deprecated_and_any_method(self):
        md = to_markdown(_controllers())
        assert "### `ANY` `ping` ~~deprecated~~" in md

    def test_controller_without_requests_is_skipped(self):
        assert "EmptyController" not in to_markdown(_controllers())

    def test_write(self, tmp_path):
        path = write_markdown(_controllers(), tmp_path / "docs" / "api.md")
        assert path.read_text(encoding="utf-8").startswith("# API Documentation")
