from apidocs_agent.controller_parser import ControllerParser, parse_controllers
from apidocs_agent.model import ChangeStatus, ControllerRecord, RequestRecord
from apidocs_agent.run import run_apidocs

__all__ = ["ControllerParser", "parse_controllers", "ChangeStatus", "ControllerRecord", "RequestRecord", "run_apidocs"]
