from pathlib import Path

import pytest

from apidocs_agent.declaration import MarkerValueKind, TypeKind, TypeShape
from apidocs_agent.errors import InvalidDeclarationError
from apidocs_agent.parsers.java_source import JavaSourceParser, parse_type_string

SOURCE = """
package com.example.demo;

import java.util.List;

/**
 * Demo endpoints
 *
 * @author bob
 */
@ApiDoc
public class DemoController {

    /**
     * Find widgets
     *
     * @param items the items
     * @param ids widget ids
     */
    @ApiDoc(url = "/find", method = {"GET", "POST"}, result = WidgetDTO.class)
    public List<WidgetDTO> find(List<WidgetDTO> items, int[] ids, String... names) {
        return null;
    }

    @ApiDoc(WidgetDTO.class)
    @RequestMapping(method = RequestMethod.GET)
    public void touch(java.util.Map<String, Long> counts) {
    }

    void hidden() {
    }
}
"""


def _unit():
    return JavaSourceParser().parse(Path("DemoController.java"), SOURCE)


class TestJavaSourceParser:
    def test_package_and_class(self):
        unit = _unit()
        assert unit.package == "com.example.demo"
        decl = unit.find_class("DemoController")
        assert decl is not None
        assert decl.package == "com.example.demo"
        assert unit.find_class("Missing") is None

    def test_class_doc_and_marker(self):
        decl = _unit().find_class("DemoController")
        assert decl.marker("ApiDoc") is not None
        assert decl.doc.summary == "Demo endpoints"
        assert decl.doc.first("author").content == "bob"

    def test_methods_keep_declaration_order_and_modifiers(self):
        decl = _unit().find_class("DemoController")
        assert [m.name for m in decl.methods] == ["find", "touch", "hidden"]
        assert decl.methods[0].is_public
        assert not decl.methods[2].is_public

    def test_param_tags(self):
        find = _unit().find_class("DemoController").methods[0]
        params = [(t.arg, t.content) for t in find.doc.tags if t.name == "param"]
        assert params == [("items", "the items"), ("ids", "widget ids")]

    def test_parameter_shapes(self):
        find = _unit().find_class("DemoController").methods[0]
        items, ids, names = find.parameters
        assert items.type == TypeShape.generic("List", [TypeShape.scalar("WidgetDTO")])
        assert ids.type.kind is TypeKind.ARRAY
        assert ids.type.component == TypeShape.scalar("int")
        # varargs -> 배열
        assert names.type == TypeShape.array_of(TypeShape.scalar("String"))

    def test_qualified_type_uses_simple_name(self):
        touch = _unit().find_class("DemoController").methods[1]
        assert touch.parameters[0].type.text == "Map<String, Long>"

    def test_void_has_no_return_type(self):
        methods = _unit().find_class("DemoController").methods
        assert methods[0].return_type.text == "List<WidgetDTO>"
        assert methods[1].return_type is None

    def test_key_value_marker(self):
        marker = _unit().find_class("DemoController").methods[0].marker("ApiDoc")
        assert not marker.is_single
        assert marker.get("url").kind is MarkerValueKind.STRING
        assert marker.get("url").text == "/find"
        methods = marker.get("method")
        assert methods.kind is MarkerValueKind.ARRAY
        assert [v.text for v in methods.items] == ["GET", "POST"]
        assert marker.get("result").kind is MarkerValueKind.TYPE
        assert marker.get("result").shape == TypeShape.scalar("WidgetDTO")

    def test_single_value_marker(self):
        touch = _unit().find_class("DemoController").methods[1]
        marker = touch.marker("ApiDoc")
        assert marker.is_single
        assert marker.value.kind is MarkerValueKind.TYPE
        mapping = touch.marker("RequestMapping")
        assert mapping.get("method").kind is MarkerValueKind.OTHER
        assert mapping.get("method").text == "RequestMethod.GET"

    def test_syntax_error(self):
        with pytest.raises(InvalidDeclarationError) as exc:
            JavaSourceParser().parse(Path("Bad.java"), "public class Bad { void x( { }")
        assert exc.value.source == "Bad.java"


class TestParseTypeString:
    def test_generic_text_is_stable(self):
        assert parse_type_string("List<Map<String, Long>>").text == "List<Map<String, Long>>"

    def test_array(self):
        shape = parse_type_string("string[]")
        assert shape == TypeShape.array_of(TypeShape.scalar("string"))

    def test_unparseable_becomes_scalar(self):
        assert parse_type_string("List<") == TypeShape.scalar("List<")
        assert parse_type_string("") == TypeShape.scalar("Object")
