from pathlib import Path

from apidocs_agent.model import ControllerRecord
from apidocs_agent.parsers.java_source import JavaSourceParser
from apidocs_agent.reader import read_class_metadata


def _read(source: str, name: str = "DemoController") -> ControllerRecord:
    decl = JavaSourceParser().parse(Path(f"{name}.java"), source).find_class(name)
    return read_class_metadata(ControllerRecord(class_name=name), decl)


class TestReadClassMetadata:
    def test_description_tag_wins_over_summary(self):
        c = _read("""
package demo;
/**
 * Summary text
 *
 * @description Tagged description
 * @author carol
 */
public class DemoController {}
""")
        assert c.description == "Tagged description"
        assert c.author == "carol"
        assert c.package == "demo"

    def test_summary_used_without_tag(self):
        c = _read("""
/**
 * Order endpoints
 */
public class DemoController {}
""")
        assert c.description == "Order endpoints"
        assert c.author is None
        assert c.package is None

    def test_class_name_when_summary_empty(self):
        c = _read("""
/** @author dave */
public class DemoController {}
""")
        assert c.description == "DemoController"
        assert c.author == "dave"

    def test_class_name_without_doc(self):
        c = _read("public class DemoController {}")
        assert c.description == "DemoController"
        assert c.documented is False

    def test_documented_flag_from_marker(self):
        c = _read("@ApiDoc public class DemoController {}")
        assert c.documented is True
