"""ControllerRecord 목록 -> Markdown 문서."""
from __future__ import annotations
from pathlib import Path

from apidocs_agent.model import ChangeStatus, ControllerRecord, FieldRecord

STATUS_BADGE = {
    ChangeStatus.NEW: "🆕 NEW",
    ChangeStatus.MODIFIED: "✏️ MODIFIED",
    ChangeStatus.UNCHANGED: "",
}


def _field_lines(fields: list[FieldRecord], depth: int = 0) -> list[str]:
    lines = []
    for f in fields:
        indent = "  " * depth
        desc = f" - {f.description}" if f.description else ""
        lines.append(f"{indent}- `{f.name}`: {f.type}{desc}")
        lines.extend(_field_lines(f.fields, depth + 1))
    return lines


def to_markdown(controllers: list[ControllerRecord]) -> str:
    lines: list[str] = []
    lines.append("# API Documentation\n")

    total = sum(len(c.requests) for c in controllers)
    changed = sum(1 for c in controllers for r in c.requests if r.change_status in (ChangeStatus.NEW, ChangeStatus.MODIFIED))
    lines.append(f"- Controllers: {len(controllers)}")
    lines.append(f"- Total requests: {total}")
    lines.append(f"- New or modified: {changed}\n")

    for ctrl in sorted(controllers, key=lambda c: c.class_name):
        if not ctrl.requests:
            continue
        lines.append(f"## {ctrl.description or ctrl.class_name}")
        meta = [f"`{ctrl.package}.{ctrl.class_name}`" if ctrl.package else f"`{ctrl.class_name}`"]
        if ctrl.author:
            meta.append(f"author: {ctrl.author}")
        lines.append(" · ".join(meta) + "\n")

        for r in ctrl.requests:
            methods = "/".join(r.methods) or "ANY"
            badge = STATUS_BADGE.get(r.change_status, "") if r.change_status else ""
            title = f"### `{methods}` `{r.url}`"
            if badge:
                title += f" {badge}"
            if r.deprecated:
                title += " ~~deprecated~~"
            lines.append(title + "\n")
            lines.append(f"{r.description}\n")
            if r.author:
                lines.append(f"*author: {r.author}*\n")

            if r.headers:
                lines.append("| Header | Value | Required | Description |")
                lines.append("|--------|-------|----------|-------------|")
                for h in r.headers:
                    lines.append(f"| `{h.name}` | {h.value or '-'} | {'Yes' if h.required else 'No'} | {h.description or '-'} |")
                lines.append("")

            if r.params:
                lines.append("| Parameter | Type | Required | Description |")
                lines.append("|-----------|------|----------|-------------|")
                for p in r.params:
                    lines.append(f"| `{p.name}` | {p.type or '-'} | {'Yes' if p.required else 'No'} | {p.description or '-'} |")
                lines.append("")

            if r.response is not None:
                lines.append(f"**Response:** `{r.response.class_name}` ({r.response.type})\n")
                lines.extend(_field_lines(r.response.fields))
                if r.response.fields:
                    lines.append("")

        lines.append("---\n")

    return "\n".join(lines)


def write_markdown(controllers: list[ControllerRecord], out_path: Path) -> Path:
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(to_markdown(controllers), encoding="utf-8")
    return out_path
