"""
Relatório de execução (console)

Objetivo:
- Renderizar o RunResult final para leitura humana no terminal.
- NÃO altera o contexto nem os resultados.
- Lista desfecho geral, status por Step e policies criadas (ordem de criação).

Em caso de falha, aponta o Step que falhou, o último Step concluído e
avisa que o ambiente ficou parcialmente provisionado (não há rollback).
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping, Optional, Sequence

from nexus_bootstrap.core.engine.executor import RunResult


def _as_pretty_json(payload: Any) -> str:
    try:
        return json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True)
    except TypeError:
        return repr(payload)


def render_table(rows: Sequence[Mapping[str, Any]], columns: Sequence[str], title: Optional[str] = None) -> str:
    """Tabela de texto alinhada; colunas na ordem recebida."""
    heading = [title, ""] if title else []
    if not rows:
        return "\n".join(heading + ["(empty)"])

    cells = [[str(row.get(c, "")) for c in columns] for row in rows]
    widths = [max(len(c), *(len(r[i]) for r in cells)) for i, c in enumerate(columns)]

    def line(values: Sequence[str]) -> str:
        return "  ".join(v.ljust(w) for v, w in zip(values, widths)).rstrip()

    out = heading + [line(columns), line(["-" * w for w in widths])]
    out.extend(line(r) for r in cells)
    return "\n".join(out)


def render_events(events: Sequence[Dict[str, Any]]) -> str:
    lines: List[str] = []
    for e in events:
        extra = {k: v for k, v in e.items() if k not in {"run_id", "step_id", "level", "message", "timestamp"}}
        suffix = f" {json.dumps(extra, ensure_ascii=False, default=str)}" if extra else ""
        lines.append(f"{e['timestamp']} {e['level']:<5} [{e['step_id']}] {e['message']}{suffix}")
    return "\n".join(lines)


def render_run_report(result: RunResult) -> str:
    ctx = result.ctx
    out: List[str] = []

    if result.success:
        out.append("Development environment set up successfully")
    else:
        out.append("There were errors setting up the development environment")
        out.append(f"  failed step: {result.failed_step}")
        out.append(f"  last completed step: {result.last_completed_step or '-'}")
        out.append("  the environment is only partially provisioned; nothing was rolled back")

    out.append("")
    out.append(f"run: {ctx.run_id}  mode: {ctx.run_mode.value}  state: {result.state.value}")
    if "config_hash" in ctx.meta:
        out.append(f"config hash: {ctx.meta['config_hash']}")
    out.append("")

    out.append(
        render_table(
            [
                {
                    "step": r.step_id,
                    "status": r.status.value,
                    "summary": r.summary,
                    "warnings": len(r.warnings),
                }
                for r in result.steps
            ],
            ["step", "status", "summary", "warnings"],
            title="Steps",
        )
    )

    for r in result.steps:
        for w in r.warnings:
            out.append(f"  warning [{r.step_id}]: {w}")
        if r.failed and "error" in r.payload:
            out.append("")
            out.append(f"Error in {r.step_id}:")
            out.append(_as_pretty_json(r.payload["error"]))

    out.append("")
    out.append(
        render_table(
            [{"id": p.id, "name": p.name} for p in ctx.policy_records],
            ["id", "name"],
            title="Policies",
        )
    )
    return "\n".join(out)
