import logging # logging setup
logging.basicConfig(
level=logging.WARNING, # DEBUG, INFO, WARNING, ERROR, CRITICAL
format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

import cmd

from prompt_toolkit import PromptSession
from prompt_toolkit.formatted_text import HTML
from prompt_toolkit.lexers import PygmentsLexer
from prompt_toolkit.styles.pygments import style_from_pygments_cls
from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.styles import get_style_by_name
from rich.console import Console
from rich.panel import Panel

from toyl import __version__
from toyl.channels import OutputChannels
from toyl.classes import ToylSystemConfig, ToylLexer, console
from toyl.completer import toyl_completer
from toyl.errors import ToylSyntaxError
from toyl.interpreter import ToylInterpreter
from toyl.renderer import TreeRenderer
from toyl.toylhelp import help_help, command_help

# characters that, right after a shell command word, mean the line is program text (e.g. "echo = 1;")
_PROGRAM_FOLLOWERS = tuple("=+-*<>!;")
# commands taking a path or program text, where a leading "/" never means division
_ARGUMENT_COMMANDS = ("run", "tree")

selected_style = style_from_pygments_cls(get_style_by_name("paraiso-dark"))


class ToylShell(cmd.Cmd):
    doc_header = "Shell commands:"
    misc_header = "Guides:"
    undoc_header = "Undocumented commands:"

    intro_text = f"""
[bold magenta]toyl[/bold magenta] [dim]v{__version__}[/dim]

    [cyan]Type 'help' for commands, 'exit' to quit.[/cyan]
    """
    colored_prompt = HTML("<ansicyan>toyl</ansicyan><ansigray>></ansigray> ")
    continue_prompt = "... "

    def __init__(self, config=None, stdout=None, session=None):
        super().__init__(stdout=stdout)
        self.config = config or ToylSystemConfig()
        self.console = Console(file=stdout) if stdout is not None else console
        self.interp = ToylInterpreter()
        self.code_buffer = ""

        # input with highlighting and completion
        self.session = session or PromptSession(
            lexer=PygmentsLexer(ToylLexer),
            completer=toyl_completer,
            style=selected_style,
        )

    def cmdloop(self, intro=None):
        # intro is shown through rich instead of cmd's plain print
        self.console.print(Panel(self.intro_text, border_style="blue"))
        self.code_buffer = ""
        stop = None
        while not stop:
            prompt = self.continue_prompt if self.code_buffer else self.colored_prompt
            try:
                text = self.session.prompt(prompt, reserve_space_for_menu=0)
            except EOFError:
                self.stdout.write("\n")
                break
            except KeyboardInterrupt:
                # drop an unfinished program
                self.code_buffer = ""
                self.stdout.write("\n")
                continue
            stop = self.onecmd(text)

    def onecmd(self, line):
        if self._is_program_text(line):
            return self.default(line)
        return super().onecmd(line)

    def _is_program_text(self, line: str) -> bool:
        if self.code_buffer:
            return True
        command, arg, _ = self.parseline(line)
        if not command or not hasattr(self, "do_" + command):
            return False
        if arg.startswith(_PROGRAM_FOLLOWERS):
            return True
        # "trace / 2;" divides, "run /tmp/a.toyl" reads a file
        return arg.startswith("/") and command not in _ARGUMENT_COMMANDS

    def emptyline(self):
        # keep waiting when a program is open, never repeat the last command
        logger.debug("emptyline")

    def apply_log_mode(self):
        if self.config.is_on("Log"):
            logging.getLogger().setLevel(logging.DEBUG)
        else:
            logging.getLogger().setLevel(logging.CRITICAL)

    def default(self, line):
        logger.debug(f"default: line={line}")
        self.apply_log_mode()
        self.code_buffer += line + "\n"
        if not self.code_buffer.strip():
            self.code_buffer = ""
            return

        try:
            program = self.interp.build_program(self.code_buffer)
        except ToylSyntaxError as e:
            if self.interp.incomplete(e):
                # open if-block or missing ';': wait for the next line
                logger.debug(f"incomplete program:\n{self.code_buffer}")
                return
            self.print_error(f"Error: {e}")
            self.code_buffer = ""
            return

        source, self.code_buffer = self.code_buffer, ""
        channels = OutputChannels()
        self.interp.run(program, channels)
        self.show_run(source, channels)

    def show_run(self, source, channels):
        values = channels.getvalues()
        if self.config.is_on("Trace"):
            self.stdout.write(highlight(source, ToylLexer(), TerminalFormatter()))
            self.console.print(values["trace"], markup=False, highlight=False, end="")
        if self.config.is_on("Echo") and values["effects"]:
            self.console.print(values["effects"], markup=False, highlight=False, end="")
        for line in values["diagnostics"].splitlines():
            self.print_error(line)

    def print_error(self, text):
        self.console.print(text, style="red", markup=False, highlight=False)

    # --- shell commands ---

    def _setting(self, key, arg):
        if arg.strip():
            message = getattr(self.config, f"set_{key}")(arg.strip())
        else:
            message = f"{key} mode: {self.config.env[key]}"
        self.console.print(message, markup=False)

    def do_echo(self, arg):
        """echo [on|off] : print effects of each run"""
        self._setting("Echo", arg)

    def do_trace(self, arg):
        """trace [on|off] : print the tree of every executed statement"""
        self._setting("Trace", arg)

    def do_log(self, arg):
        """log [on|off] : debug logging"""
        self._setting("Log", arg)
        self.apply_log_mode()

    def do_run(self, arg):
        """run <file> : run a source file, output on screen"""
        path = arg.strip()
        if not path:
            self.print_error("Error: run needs a file name")
            return
        try:
            with open(path, "r", encoding="utf-8") as f:
                source = f.read()
        except OSError as e:
            self.print_error(f"Error: cannot read {path}: {e}")
            return

        channels = OutputChannels()
        self.interp.execute(source, channels)
        self.show_run(source, channels)

    def do_tree(self, arg):
        """tree <program> : show the tree of each top-level statement without running it"""
        if not arg.strip():
            self.print_error("Error: tree needs program text")
            return
        try:
            program = self.interp.build_program(arg)
        except ToylSyntaxError as e:
            self.print_error(f"Error: {e}")
            return
        renderer = TreeRenderer(self.stdout)
        for stmt in program.body:
            renderer.render(stmt)

    def do_exit(self, arg):
        """Leave the shell"""
        self.console.print("Bye.")
        return True

    def do_quit(self, arg):
        """Leave the shell"""
        return True

    # EOF (Ctrl+D)
    def do_EOF(self, arg):
        self.stdout.write("\n")
        return True

    def do_help(self, arg):
        """help [command] : list of commands, or details of one"""
        if not arg:
            self.stdout.write("\n".join(help_help) + "\n")
        elif arg in command_help:
            self.stdout.write(command_help[arg] + "\n")
            return
        return cmd.Cmd.do_help(self, arg)


if __name__ == "__main__":
    try:
        ToylShell(ToylSystemConfig.load()).cmdloop()
    except KeyboardInterrupt:
        print("\nGoodbye.")
