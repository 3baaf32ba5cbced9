"""
API 문서화 CLI.
- apidocs-agent generate ./my-project
- apidocs-agent watch ./my-project
"""
from __future__ import annotations
import logging
import time
from pathlib import Path
from typing import Callable, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from apidocs_agent.config import settings
from apidocs_agent.run import run_apidocs
from apidocs_agent.scanner import in_skipped_dir

logger = logging.getLogger(__name__)

console = Console()

app = typer.Typer(
    name="apidocs-agent",
    add_completion=False,
    help="Java 컨트롤러 소스에서 API 문서 생성 + 이전 스냅샷 대비 변경 표시",
)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@app.command("generate")
def generate(
    repo: str = typer.Argument(..., help="로컬 프로젝트 경로"),
    out_dir: Optional[Path] = typer.Option(None, help="출력 폴더 (기본: APIDOCS_OUTPUT_DIR)"),
    baseline: Optional[Path] = typer.Option(None, help="비교할 이전 스냅샷 JSON (기본: 출력 폴더의 스냅샷)"),
    auto_generate: Optional[bool] = typer.Option(None, "--auto-generate/--no-auto-generate", help="@ApiDoc 없는 메서드도 문서화"),
    resolve_fields: bool = typer.Option(True, help="응답 클래스 필드까지 해석"),
    spring: bool = typer.Option(True, help="Spring MVC annotation 해석"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="디버그 로그"),
):
    """API 문서(Markdown)와 스냅샷(JSON) 생성."""
    _setup_logging(verbose)
    try:
        run_apidocs(
            repo,
            out_dir=out_dir,
            baseline=baseline,
            auto_generate=auto_generate,
            resolve_fields=resolve_fields,
            spring=spring,
        )
    except ValueError as e:
        raise typer.BadParameter(str(e))


class JavaChangeHandler(FileSystemEventHandler):
    """repo 아래 .java 변경(빌드/테스트 폴더 제외)이 들어오면 regenerate 를 부른다.

    debounce 초 안에 다시 들어온 이벤트는 묶어서 버린다.
    """

    def __init__(self, root: Path, regenerate: Callable[[], object], debounce: float = 0.8,
                 clock: Callable[[], float] = time.monotonic):
        self.root = root
        self.regenerate = regenerate
        self.debounce = debounce
        self.clock = clock
        self._last: Optional[float] = None

    def is_relevant(self, event: FileSystemEvent) -> bool:
        if event.is_directory:
            return False
        paths = [event.src_path, getattr(event, "dest_path", "")]
        return any(
            p and Path(str(p)).suffix == ".java" and not in_skipped_dir(Path(str(p)), self.root)
            for p in paths
        )

    def on_any_event(self, event: FileSystemEvent) -> None:
        if not self.is_relevant(event):
            return
        now = self.clock()
        if self._last is not None and now - self._last < self.debounce:
            return
        self._last = now

        logger.info("%s: %s", event.event_type, event.src_path)
        self.regenerate()


@app.command("watch")
def watch(
    repo: str = typer.Argument(..., help="로컬 프로젝트 경로"),
    out_dir: Optional[Path] = typer.Option(None, help="출력 폴더"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    """.java 파일이 바뀔 때마다 문서를 다시 생성."""
    _setup_logging(verbose)
    repo_path = Path(repo).expanduser()
    if not repo_path.is_dir():
        raise typer.BadParameter("watch는 로컬 경로에서 사용하세요.")
    repo_path = repo_path.resolve()

    run_apidocs(repo_path, out_dir=out_dir)
    obs = Observer()
    handler = JavaChangeHandler(repo_path, lambda: run_apidocs(repo_path, out_dir=out_dir))
    obs.schedule(handler, str(repo_path), recursive=True)
    obs.start()
    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        pass
    finally:
        obs.stop()
        obs.join()


if __name__ == "__main__":
    app()
