"""Guide tab with usage notes."""

from __future__ import annotations

from textual.containers import VerticalScroll
from textual.widgets import Markdown

from ..constants import HELP_MARKDOWN


class GuideTab(VerticalScroll):
    def compose(self):
        yield Markdown(HELP_MARKDOWN, classes="guide")
