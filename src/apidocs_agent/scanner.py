"""Controller 후보 .java 파일 스캐너."""
from __future__ import annotations
import re
from pathlib import Path
from typing import Iterator

# 컨트롤러 annotation 또는 @ApiDoc 마커
CONTROLLER_MARKERS = ("RestController", "Controller", "ApiDoc", "RequestMapping") + tuple(
    f"{verb}Mapping" for verb in ("Get", "Post", "Put", "Delete", "Patch")
)
MARKER_RE = re.compile(r"@\s*(?:%s)\b" % "|".join(CONTROLLER_MARKERS))

CONTROLLER_SUFFIXES = ("controller", "resource", "api")

SKIP_DIRS = frozenset({"test", "tests", "build", "target", "out", "node_modules", ".git", ".gradle", ".idea"})


def in_skipped_dir(path: Path, root: Path) -> bool:
    try:
        parts = path.relative_to(root).parts[:-1]
    except ValueError:
        return False
    return not SKIP_DIRS.isdisjoint(parts)


def has_controller_name(path: Path) -> bool:
    return path.suffix == ".java" and path.stem.lower().endswith(CONTROLLER_SUFFIXES)


def is_controller_source(path: Path, text: str) -> bool:
    return MARKER_RE.search(text) is not None or has_controller_name(path)


def iter_java_files(root: Path) -> Iterator[Path]:
    for path in root.rglob("*.java"):
        if path.is_file() and not in_skipped_dir(path, root):
            yield path


def scan_controller_files(repo_path: Path) -> list[Path]:
    """컨트롤러 annotation, @ApiDoc 마커, 또는 *Controller/*Resource/*Api 이름을 가진 파일 (정렬)."""
    return sorted(
        f for f in iter_java_files(repo_path)
        if is_controller_source(f, f.read_text(encoding="utf-8", errors="ignore"))
    )
