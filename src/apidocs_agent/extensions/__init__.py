from apidocs_agent.extensions.base import ParserExtension
from apidocs_agent.extensions.spring import SpringExtension

__all__ = ["ParserExtension", "SpringExtension"]
