"""Relatório de execução: leitura do contexto final, sem efeitos colaterais."""

from .console import render_events, render_run_report, render_table

__all__ = ["render_events", "render_run_report", "render_table"]
