"""Interactive console: type lines, complete words from what was shown before."""

import logging
from collections import deque

from prompt_toolkit import PromptSession
from prompt_toolkit.formatted_text import HTML
from prompt_toolkit.patch_stdout import patch_stdout  # type: ignore
from prompt_toolkit.shortcuts import print_formatted_text
from prompt_toolkit.styles import Style
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from .completer import DabbrevCompleter
from .config import Settings
from .core.query import last_word, query
from .core.source import TextSource


class Scrollback:
    """The most recent lines shown in the console."""

    def __init__(self, max_lines: int = 2000, width: int | None = None):
        self.lines: deque[str] = deque(maxlen=max_lines)
        self.width = width

    def add(self, text: str) -> None:
        self.lines.extend(text.splitlines())

    def clear(self) -> None:
        self.lines.clear()

    def text(self) -> str:
        return "\n".join(self.lines)

    def source(self, open_end: bool = False) -> TextSource:
        return TextSource(self.text(), width=self.width, open_end=open_end)


class ConsoleApp:
    """Prompt loop with dabbrev auto-completion over the scrollback."""

    def __init__(self, settings: Settings, initial_text: str = "", console: Console | None = None):
        self._settings = settings
        self.console = console or Console()
        self.scrollback = Scrollback(settings.history_lines, settings.wrap_width)
        self.scrollback.add(initial_text)
        self.completer = DabbrevCompleter(
            self.scrollback.source,
            max_completions=settings.max_completions,
            tracer=settings.tracer(),
        )
        self._logger = logging.getLogger("dabbrev.console")

        # Completion menu styling: transparent background, light-blue highlight
        self.prompt_style = Style.from_dict({
            "prompt": "ansicyan bold",
            "completion-menu": "bg:default",
            "completion-menu.completion": "bg:default fg:#bbbbbb",
            "completion-menu.completion.current": "bg:#5fafff fg:#202020 bold",
            "completion-menu.meta.completion": "bg:#202020 fg:#bbbbbb",
            "completion-menu.meta.completion.current": "bg:#202020 #5fafff",
        })

    def _print_banner(self) -> None:
        """Print the application banner."""
        banner = Text()
        banner.append("dabbrev", style="bold white")
        banner.append(" - complete words you have already seen", style="dim")
        self.console.print(Panel(banner, border_style="blue", padding=(1, 2)))

        help_text = Text()
        help_text.append("Commands:\n", style="bold")
        help_text.append("/words [prefix]", style="cyan")
        help_text.append(" - List indexed words\n", style="white")
        help_text.append("/last", style="cyan")
        help_text.append(" - Show the unfinished last word\n", style="white")
        help_text.append("/clear", style="cyan")
        help_text.append(" - Forget the scrollback\n", style="white")
        help_text.append("/exit, /quit", style="cyan")
        help_text.append(" - Exit application\n", style="white")
        help_text.append("\nAny other input is added to the scrollback.", style="dim")
        help_text.append("\nTab or typing opens completions for the word at the cursor.", style="dim")
        self.console.print(Panel(help_text, title="Help", border_style="dim"))

    def handle_command(self, command: str) -> bool:
        """Run a slash command. Returns False when the console should exit."""
        parts = command.strip().split()
        if not parts:
            return True

        cmd = parts[0].lower()
        args = parts[1:]

        if cmd in ["/exit", "/quit"]:
            self.console.print("[yellow]Exiting...[/yellow]")
            return False

        elif cmd == "/words":
            prefix = args[0] if args else ""
            words = query(self.scrollback.source(), prefix, tracer=self._settings.tracer())
            if not words:
                self.console.print("[yellow]No matching words.[/yellow]")
            for word in words:
                self.console.print(word, markup=False, highlight=False)

        elif cmd == "/last":
            word = last_word(self.scrollback.source(open_end=True), tracer=self._settings.tracer())
            if word:
                self.console.print(word, markup=False, highlight=False)
            else:
                self.console.print("[yellow](none)[/yellow]")

        elif cmd == "/clear":
            self.scrollback.clear()
            self.console.print("[green]Scrollback cleared.[/green]")

        elif cmd == "/help":
            self._print_banner()

        else:
            self.console.print(Text(f"Unknown command: {cmd}", style="red"))
            self.console.print("[yellow]Type /help for available commands[/yellow]")

        return True

    def handle_line(self, line: str) -> None:
        """Add an entered line to the scrollback."""
        self.scrollback.add(line)
        self._logger.debug("Scrollback now %d lines", len(self.scrollback.lines))

    async def run(self) -> None:
        """Run the prompt loop."""
        self._print_banner()

        prompt_session = PromptSession(
            completer=self.completer,
            style=self.prompt_style,
            complete_while_typing=True,
        )

        with patch_stdout():
            while True:
                try:
                    user_input = await prompt_session.prompt_async(HTML("<prompt>› </prompt>"))
                except KeyboardInterrupt:
                    print_formatted_text(HTML("\n<ansiyellow>Interrupted by user.</ansiyellow>"))
                    break
                except EOFError:
                    print_formatted_text(HTML("\n<ansiyellow>End of input.</ansiyellow>"))
                    break

                text = user_input.strip()
                if not text:
                    continue
                if text.startswith("/"):
                    if not self.handle_command(text):
                        break
                else:
                    self.handle_line(user_input)
