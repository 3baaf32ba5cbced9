"""컨트롤러 소스 한 개 -> ControllerRecord.

선언 트리 -> 클래스 메타데이터 -> 메서드별 RequestRecord -> 변경 분류 순으로 한 방향으로만 흐른다.
클래스 간 공유 상태는 설정값과 baseline(읽기 전용)뿐이라 호출 측에서 병렬 처리해도 된다.
"""
from __future__ import annotations
import logging
from pathlib import Path
from typing import Iterable, Optional, Sequence

from apidocs_agent.config import settings
from apidocs_agent.diff import duplicate_urls
from apidocs_agent.errors import InvalidDeclarationError
from apidocs_agent.extensions.base import ParserExtension
from apidocs_agent.extractor import MemberExtractor
from apidocs_agent.model import ControllerRecord
from apidocs_agent.parsers.base import SourceParser
from apidocs_agent.parsers.java_source import JavaSourceParser
from apidocs_agent.reader import read_class_metadata
from apidocs_agent.resolver import ResponseResolver

logger = logging.getLogger(__name__)


class ControllerParser:
    def __init__(
        self,
        *,
        auto_generate: Optional[bool] = None,
        baseline: Sequence[ControllerRecord] | None = None,
        extensions: Sequence[ParserExtension] = (),
        resolver: ResponseResolver | None = None,
        source_parser: SourceParser | None = None,
        excluded_param_types: Iterable[str] | None = None,
    ):
        self.source_parser = source_parser or JavaSourceParser()
        self.extensions = list(extensions)
        self.baseline = list(baseline) if baseline else None
        self.extractor = MemberExtractor(
            auto_generate=settings.auto_generate if auto_generate is None else auto_generate,
            excluded_types=settings.excluded_param_types if excluded_param_types is None else excluded_param_types,
            extensions=self.extensions,
            resolver=resolver,
            baseline=self.baseline,
        )

        dups = duplicate_urls(self.baseline)
        if dups:
            # 같은 url 이 여럿이면 먼저 나온 것과 비교한다
            logger.warning("baseline has requests with the same url and methods, first match wins: %s", ", ".join(dups))

    def parse(self, java_file: Path) -> ControllerRecord:
        try:
            text = java_file.read_text(encoding="utf-8", errors="ignore")
        except OSError as e:
            raise InvalidDeclarationError(str(java_file), f"cannot read: {e.strerror or e}") from e
        if not self.source_parser.can_parse(java_file, text):
            raise InvalidDeclarationError(str(java_file), "unsupported source file")
        return self.parse_source(text, java_file.stem, source_file=java_file)

    def parse_source(self, text: str, class_name: str, source_file: Optional[Path] = None) -> ControllerRecord:
        """class_name 과 같은 이름의 클래스를 찾아 추출. 없으면 이름만 있는 빈 레코드."""
        controller = ControllerRecord(class_name=class_name)
        unit = self.source_parser.parse(source_file or Path(f"{class_name}.java"), text)

        decl = unit.find_class(class_name)
        if decl is None:
            logger.debug("class %s not found in %s", class_name, source_file)
            return controller

        for ext in self.extensions:
            ext.before_controller(controller, decl)
        read_class_metadata(controller, decl)
        self.extractor.extract(controller, decl.methods, source_file)
        for ext in self.extensions:
            ext.after_controller(controller, decl)
        return controller


def parse_controllers(files: Iterable[Path], parser: ControllerParser) -> list[ControllerRecord]:
    """여러 파일 처리. 파싱 불가 파일은 로그만 남기고 건너뛴다."""
    controllers: list[ControllerRecord] = []
    for f in files:
        try:
            controllers.append(parser.parse(f))
        except InvalidDeclarationError as e:
            logger.error("cannot parse %s: %s", f, e.reason)
    return controllers
