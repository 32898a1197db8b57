"""A Rich-powered console front-end for browsing recorded lectures."""

from __future__ import annotations

from typing import Iterable, Optional

from rich import box
from rich.columns import Columns
from rich.console import Console, Group
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from ..services.naming import LectureInfo
from ..services.storage import LectureIndex
from .overview import CourseOverview, OverviewSnapshot, collect_overview


class ModernUI:
    """Render the course overview using Rich widgets."""

    def __init__(self, index: LectureIndex, *, console: Optional[Console] = None) -> None:
        self._index = index
        self._console = console or Console()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def run(self) -> None:
        snapshot = collect_overview(self._index)
        console = self._console

        console.rule("[bold magenta]Echo Lecture Overview")

        if snapshot.course_count == 0:
            console.print(
                Panel(
                    "No courses have been recorded yet.\n"
                    "Use [bold]echo-recorder ensure-course NAME[/bold] to create one.",
                    border_style="yellow",
                    box=box.ROUNDED,
                )
            )
            return

        tree_panel = Panel(
            self._build_tree(snapshot.courses),
            title="Courses",
            border_style="cyan",
            box=box.ROUNDED,
        )
        stats_panel = self._build_stats_panel(snapshot)

        console.print(Columns([tree_panel, stats_panel], expand=True, equal=True))
        console.print()
        console.print(
            Text(
                "Tip: pass --style console for a plain-text listing.",
                style="dim",
            ),
            justify="center",
        )

    # ------------------------------------------------------------------
    # Rendering helpers
    # ------------------------------------------------------------------
    def _build_tree(self, courses: Iterable[CourseOverview]) -> Tree:
        tree = Tree("[bold cyan]Courses", guide_style="cyan")

        for course in courses:
            course_node = tree.add(Text(course.name, style="bold"))
            if not course.lectures:
                course_node.add("[dim]No lectures yet")
                continue

            for lecture in course.lectures:
                course_node.add(self._build_lecture_label(lecture))

        return tree

    @staticmethod
    def _build_lecture_label(lecture: LectureInfo) -> Text:
        label = Text(lecture.date, style="bright_cyan")
        label.append("  ")
        if lecture.title:
            label.append(lecture.title, style="white")
        else:
            label.append("Untitled", style="dim")
        return label

    def _build_stats_panel(self, snapshot: OverviewSnapshot) -> Panel:
        metrics = Table.grid(expand=True, padding=(0, 1))
        metrics.add_column(style="dim")
        metrics.add_column(justify="right", style="bold")
        metrics.add_row("Courses", str(snapshot.course_count))
        metrics.add_row("Lectures", str(snapshot.lecture_count))
        metrics.add_row("Recording days", str(len(snapshot.dates)))
        metrics.add_row("Latest", snapshot.latest_date or "–")

        location = Text(snapshot.root, style="dim", overflow="fold")

        body = Group(metrics, Rule(style="magenta"), location)
        return Panel(body, title="At a glance", border_style="magenta", box=box.ROUNDED)


__all__ = ["ModernUI"]
