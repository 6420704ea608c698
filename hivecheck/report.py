"""Console reporting (rich).

Display formatting only: glyphs and colours are derived from CheckStatus
here and nowhere else. Failures and skips show up twice on purpose, inline
while the run progresses and again in the final summary.
"""
from __future__ import annotations

from typing import Dict

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from hivecheck.envfile import EnvLoadResult
from hivecheck.registry import ModelRegistry
from hivecheck.types import CheckResult, CheckStatus, ResultSet

_STYLE: Dict[CheckStatus, tuple[str, str]] = {
    CheckStatus.WORKING: ("✅", "green"),
    CheckStatus.WORKING_WITH_CAVEAT: ("⚠️ ", "yellow"),
    CheckStatus.FAILED: ("❌", "red"),
    CheckStatus.SKIPPED: ("⚠️ ", "yellow"),
}


def format_result(result: CheckResult) -> str:
    glyph, colour = _STYLE[result.status]
    return f"[{colour}]{glyph} {escape(result.message)}[/{colour}]"


class Reporter:
    def __init__(
        self,
        console: Console | None = None,
        err_console: Console | None = None,
    ) -> None:
        self.console = console or Console(highlight=False)
        self.err_console = err_console or Console(stderr=True, highlight=False)

    def banner(self) -> None:
        self.console.print(
            "[bold cyan]🚀 HiveLLM Chat Hub - model configuration check"
            "[/bold cyan]\n"
        )

    def env_loaded(self, env: EnvLoadResult) -> None:
        if env.found:
            self.console.print(
                f"[green][ENV] ✅ {escape(str(env.path))} loaded "
                f"({len(env.loaded_keys)} keys)[/green]"
            )
            return
        self.console.print(
            f"[yellow][ENV] ⚠️  {escape(str(env.path))} not found[/yellow]"
        )
        self.console.print(
            "[yellow][ENV] Copy env-example.txt to .env and add your API "
            "keys[/yellow]"
        )

    def section(self, title: str) -> None:
        self.console.print(f"\n[blue]📋 {escape(title)}[/blue]")

    def checking(self, model_id: str, provider: str | None = None) -> None:
        label = escape(model_id)
        if provider:
            label += f" ({escape(provider)})"
        self.console.print(f"\n[yellow]🔍 Checking {label}...[/yellow]")

    def result(self, result: CheckResult) -> None:
        self.console.print(format_result(result))

    def summary(
        self,
        results: ResultSet,
        registry: ModelRegistry,
        tool: str = "aider",
    ) -> None:
        out = self.console
        caveats = len(results.caveats)
        out.print("\n[bold cyan]📊 SUMMARY:[/bold cyan]")
        working = f"✅ Working: {len(results.working)} models"
        if caveats:
            working += f" ({caveats} with warnings)"
        out.print(f"[green]{working}[/green]")
        out.print(f"[red]❌ Failed: {len(results.failed)} models[/red]")
        out.print(
            f"[yellow]⚠️  Skipped: {len(results.skipped)} models[/yellow]"
        )

        out.print("\n[blue]📈 DETAILED STATISTICS:[/blue]")
        out.print(
            f"[cyan]• {escape(registry.builtin_provider)}: "
            f"{len(registry.builtin_models)} models (built-in)[/cyan]"
        )
        out.print(
            f"[cyan]• {escape(tool)}: {len(registry.external_models)} "
            "models (external APIs)[/cyan]"
        )
        out.print(f"[cyan]• Total: {registry.total} models available[/cyan]")

        table = Table(title="📊 MODELS BY PROVIDER", title_justify="left")
        table.add_column("Provider", style="cyan")
        table.add_column("Models", justify="right")
        for provider, count in registry.provider_counts().items():
            table.add_row(escape(provider), str(count))
        out.print()
        out.print(table)

        if results.failed:
            out.print("\n[red]❌ Failed models:[/red]")
            for r in results.failed:
                out.print(
                    f"[red]  - {escape(r.model_id)} "
                    f"({escape(r.provider or '?')}): "
                    f"{escape(r.message)}[/red]"
                )

        if results.skipped:
            out.print("\n[yellow]⚠️  Skipped models (no API key):[/yellow]")
            for r in results.skipped:
                out.print(
                    f"[yellow]  - {escape(r.model_id)} "
                    f"({escape(r.provider or '?')}): "
                    f"{escape(r.credential_name or '')}[/yellow]"
                )

    def tips(self, env_file: str = ".env", tool: str = "aider") -> None:
        self.console.print(
            "\n[bold green]🎉 Configuration check finished![/bold green]"
        )
        self.console.print(
            f"[cyan]💡 To add missing API keys, edit {escape(env_file)}[/cyan]"
        )
        if tool == "aider":
            self.console.print(
                "[cyan]💡 aider models need the aider CLI: "
                "pip install aider-chat[/cyan]"
            )
        else:
            self.console.print(
                f"[cyan]💡 External models need the {escape(tool)} CLI on "
                "PATH[/cyan]"
            )

    def error(self, message: str) -> None:
        self.err_console.print(
            f"[red]❌ Error during check: {escape(message)}[/red]"
        )


__all__ = ["Reporter", "format_result"]
