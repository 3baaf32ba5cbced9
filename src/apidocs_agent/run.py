"""API 문서 생성: Controller 스캔 → 정적 추출 → 변경 분류 → Markdown + 스냅샷 출력."""
from __future__ import annotations
from pathlib import Path

from rich.console import Console

from apidocs_agent.config import settings
from apidocs_agent.controller_parser import ControllerParser, parse_controllers
from apidocs_agent.extensions.spring import SpringExtension
from apidocs_agent.model import ChangeStatus
from apidocs_agent.resolver import SourceTreeResolver
from apidocs_agent.scanner import scan_controller_files
from apidocs_agent.snapshot import load_snapshot, save_snapshot
from apidocs_agent.writer import write_markdown

console = Console()


def run_apidocs(
    repo: str | Path,
    out_dir: Path | None = None,
    baseline: Path | None = None,
    auto_generate: bool | None = None,
    resolve_fields: bool = True,
    spring: bool = True,
) -> tuple[Path, Path]:
    """
    저장소를 분석해 API 문서(Markdown)와 스냅샷(JSON)을 만든다.
    baseline 을 주지 않으면 출력 폴더의 이전 스냅샷과 비교한다.
    반환: (markdown_path, snapshot_path)
    """
    repo_path = Path(repo).expanduser()
    if not repo_path.is_dir():
        raise ValueError(f"repo는 로컬 디렉터리여야 합니다: {repo}")
    repo_path = repo_path.resolve()

    base = out_dir or settings.doc_output_dir
    base.mkdir(parents=True, exist_ok=True)
    md_path = base / settings.markdown_file
    snapshot_path = base / settings.snapshot_file

    previous = load_snapshot(baseline or snapshot_path)
    console.print(f"[bold]Repo:[/bold] {repo_path}")
    if previous:
        console.print(f"Baseline: [cyan]{sum(len(c.requests) for c in previous)}[/cyan] requests")

    controller_files = scan_controller_files(repo_path)
    console.print(f"Found [green]{len(controller_files)}[/green] controller candidates")

    parser = ControllerParser(
        auto_generate=auto_generate,
        baseline=previous,
        extensions=[SpringExtension()] if spring else [],
        resolver=SourceTreeResolver([repo_path]) if resolve_fields else None,
    )
    controllers = [c for c in parse_controllers(controller_files, parser) if c.requests]

    counts = {s: 0 for s in ChangeStatus}
    for c in controllers:
        for r in c.requests:
            counts[r.change_status] += 1
    console.print(
        f"Requests: new=[green]{counts[ChangeStatus.NEW]}[/green] "
        f"modified=[yellow]{counts[ChangeStatus.MODIFIED]}[/yellow] "
        f"unchanged={counts[ChangeStatus.UNCHANGED]}"
    )

    write_markdown(controllers, md_path)
    save_snapshot(controllers, snapshot_path)
    console.print(f"[bold green]MD:[/bold green]       {md_path}")
    console.print(f"[bold green]Snapshot:[/bold green] {snapshot_path}")
    return md_path, snapshot_path
