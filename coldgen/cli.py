from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskID, TextColumn
from rich.prompt import Prompt
from rich.table import Table

from . import __version__
from .codegen import (
    Definitions,
    DomainModel,
    GenerationResult,
    GeneratorError,
    ProgressSink,
    generate_target,
    get_registry,
    load_percentage,
    load_project,
    ProjectConfig,
)
from .logging_config import get_logger, setup_logging
from .utils import Timer

logger = get_logger(__name__)


class RichProgressSink(ProgressSink):
    """Forward generator progress to a rich progress task."""

    def __init__(self, progress: Progress, task: TaskID) -> None:
        self.progress = progress
        self.task = task

    def update(self, processed: int, total: int, label: str) -> None:
        self.progress.update(
            self.task,
            completed=processed,
            total=total,
            percentage=load_percentage(total, processed),
            label=label,
        )


class CLIHandler:
    """Handle command-line interface (CLI) operations for code generation."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize CLI handler with a rich console."""
        self.console = console or Console()
        self.registry = get_registry()
        logger.debug("CLIHandler initialized")

    def run(self, args: argparse.Namespace) -> int:
        """Run the generation for the targets selected on the command line.

        Args:
            args: Parsed CLI arguments.

        Returns:
            Exit code (0 for success, 1 for failure).
        """
        if args.list_targets:
            return self._list_targets()

        self._print_banner()

        try:
            config, definitions, model = load_project(args.config_dir)
        except GeneratorError as e:
            self.console.print(f"❌ [red]{escape(str(e))}[/red]")
            return 1

        setup_logging(
            verbose=args.verbose,
            log_dir=config.log_dir if config.log_enabled else None,
            console=self.console,
        )

        targets = self._select_targets(args.targets)
        if not targets:
            self.console.print("❌ [red]You must choose at least one target.[/red]")
            return 1

        timer = Timer()
        exit_code = 0
        for target in targets:
            try:
                result = self._generate(target, config, definitions, model)
            except GeneratorError as e:
                logger.error("Could not start %s generation: %s", target, e)
                result = GenerationResult.error(str(e), exception=e)
            self._print_result(target, result)
            if not result.success or result.failed_files:
                exit_code = 1

        self.console.print(
            f"Total time elapsed: [bold yellow]{timer.elapsed}s[/bold yellow]"
        )
        return exit_code

    def _print_banner(self) -> None:
        self.console.print(
            Panel(
                f"Starting application: [green]coldgen[/green] "
                f"([green]ver.{__version__}[/green])\n"
                "Description: generate java, typescript and mongoose "
                "sources from one domain model",
                padding=1,
            )
        )

    def _select_targets(self, requested: Sequence[str]) -> list[str]:
        """Resolve target names and aliases, prompting when none were given."""
        if not requested:
            available = self.registry.list_targets()
            answer = Prompt.ask(
                "Select targets to generate (comma separated)",
                default=",".join(available),
                console=self.console,
            )
            requested = [name.strip() for name in answer.split(",") if name.strip()]

        targets: list[str] = []
        for name in requested:
            if not self.registry.is_supported(name):
                self.console.print(f"⚠ [yellow]Skipping unknown target '{escape(name)}'[/yellow]")
                logger.warning("Unknown target requested: %s", name)
                continue
            target = self.registry.resolve_name(name)
            if target not in targets:
                targets.append(target)
        return targets

    def _generate(
        self,
        target: str,
        config: ProjectConfig,
        definitions: Definitions,
        model: DomainModel,
    ) -> GenerationResult:
        with Progress(
            SpinnerColumn(),
            TextColumn("[bold blue]{task.description}"),
            BarColumn(),
            TextColumn("{task.fields[percentage]}"),
            TextColumn("[dim]{task.fields[label]}"),
            console=self.console,
            transient=True,
        ) as progress:
            task = progress.add_task(
                f"Generating {target}",
                total=model.class_count(),
                percentage=load_percentage(0, 0),
                label="",
            )
            sink = RichProgressSink(progress, task)
            return generate_target(target, config, definitions, model, sink)

    def _print_result(self, target: str, result: GenerationResult) -> None:
        if not result.success:
            self.console.print(f"❌ [red]{target}: {escape(result.error_message or '')}[/red]")
            return

        metadata = result.metadata
        table = Table(title=f"📦 {target}", box=box.ROUNDED, title_style="bold cyan")
        table.add_column("Item", style="bold")
        table.add_column("Value", style="green")
        table.add_row("Output", escape(metadata.get("output_dir", "")))
        table.add_row("Library version", metadata.get("lib_version", ""))
        table.add_row(
            "Classes processed",
            f"{metadata.get('processed', 0)}/{metadata.get('class_count', 0)}",
        )
        table.add_row("Files written", str(len(result.files)))
        table.add_row("Unresolved types", str(len(result.unresolved)))
        table.add_row("Failed files", str(len(result.failed_files)))
        table.add_row("Elapsed", f"{metadata.get('elapsed', 0)}s")
        self.console.print(table)

        for warning in result.warnings:
            self.console.print(f"⚠ [yellow]{escape(warning)}[/yellow]")

    def _list_targets(self) -> int:
        """List supported targets with their aliases."""
        table = Table(
            title="📋 Supported Targets", box=box.ROUNDED, title_style="bold cyan"
        )
        table.add_column("Target", style="bold green", no_wrap=True)
        table.add_column("Generator Class", style="dim")
        table.add_column("Aliases", style="blue")

        for target in self.registry.list_targets():
            info = self.registry.get_target_info(target)
            aliases = ", ".join(info["aliases"]) if info["aliases"] else "[dim]none[/dim]"
            table.add_row(f"🔧 {target}", info["class"], aliases)

        self.console.print(table)
        return 0


def build_parser() -> argparse.ArgumentParser:
    """Create the command line parser."""
    parser = argparse.ArgumentParser(
        prog="coldgen",
        description="Generate java, typescript and mongoose sources from a domain model",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  coldgen java typescript
  coldgen --config-dir ./project mongoose
  coldgen --list-targets
        """.strip(),
    )
    parser.add_argument(
        "targets",
        nargs="*",
        metavar="TARGET",
        help="Targets to generate (prompted for when omitted)",
    )
    parser.add_argument(
        "--target",
        "-t",
        dest="extra_targets",
        action="append",
        default=[],
        metavar="TARGET",
        help="Target to generate; may be repeated",
    )
    parser.add_argument(
        "--config-dir",
        "-c",
        type=Path,
        default=None,
        help="Directory containing coldConfig.json (default: current directory)",
    )
    parser.add_argument(
        "--list-targets",
        action="store_true",
        help="List supported targets and exit",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log debug messages to the console",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Console script entry point."""
    args = build_parser().parse_args(argv)
    args.targets = list(args.targets) + list(args.extra_targets)
    return CLIHandler().run(args)


if __name__ == "__main__":
    sys.exit(main())
