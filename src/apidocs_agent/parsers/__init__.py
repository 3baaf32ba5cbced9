from apidocs_agent.parsers.base import SourceParser
from apidocs_agent.parsers.java_source import JavaSourceParser, parse_type_string

__all__ = ["SourceParser", "JavaSourceParser", "parse_type_string"]
