from __future__ import annotations
from abc import ABC, abstractmethod
from pathlib import Path
from apidocs_agent.declaration import SourceUnit

class SourceParser(ABC):
    @abstractmethod
    def can_parse(self, path: Path, text: str) -> bool: ...
    @abstractmethod
    def parse(self, path: Path, text: str) -> SourceUnit: ...
