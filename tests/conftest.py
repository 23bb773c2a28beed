"""
Shared pytest fixtures.

FakeHost stands in for the machine: a fake search path, a set of
executable files, canned subprocess responses, and a record of every
remediation command that would have run.
"""
from io import StringIO

import pytest
from rich.console import Console

from coursecheck.context import RunContext
from coursecheck.config import default_config
from coursecheck.fixer.installer import BrewInstaller
from coursecheck.host import HostEnvironment
from coursecheck.ui.theme import COURSECHECK_THEME


class FakeHost(HostEnvironment):
    """HostEnvironment backed by dictionaries instead of the real system."""

    def __init__(
        self,
        executables=None,
        files=(),
        commands=None,
        kernel="Linux",
        proc_version="",
        env=None,
        user="student",
        stream_rc=None,
        home="/home/student",
    ):
        environ = {"HOME": home, "PATH": "/usr/bin"}
        environ.update(env or {})
        super().__init__(console=None, verbose=False, environ=environ)
        self.executables = dict(executables or {})   # name → resolved path
        self.files = set(files)                      # executable files by absolute path
        self.commands = dict(commands or {})         # tuple(argv) → (rc, out, err)
        self.kernel = kernel
        self.proc_version = proc_version
        self.user = user
        self.stream_rc = dict(stream_rc or {})       # cmd key → exit status
        self.on_stream = {}                          # cmd key → callable(host)
        self.path_dirs = []
        self.written = {}                            # path → list of appended lines
        self.captured = []
        self.streamed = []

    def resolve_executable(self, name):
        if name in self.executables:
            return self.executables[name]
        for d in self.path_dirs:
            candidate = f"{d}/{name}"
            if candidate in self.files:
                return candidate
        return None

    def prepend_to_path(self, directory):
        self.path_dirs.insert(0, directory)

    def is_executable(self, path):
        return str(self.expand(path)) in self.files

    def path_exists(self, path):
        return self.is_executable(path)

    def read_text(self, path):
        if str(path) == "/proc/version":
            return self.proc_version
        return "\n".join(self.written.get(str(self.expand(path)), []))

    def append_line(self, path, line):
        lines = self.written.setdefault(str(self.expand(path)), [])
        if line in lines:
            return False
        lines.append(line)
        return True

    def kernel_name(self):
        return self.kernel

    def username(self):
        return self.user

    def run_capturing_output(self, argv, timeout=10):
        self.captured.append(tuple(argv))
        return self.commands.get(tuple(argv), (-1, "", f"Command not found: {argv[0]}"))

    def run_streaming(self, cmd, console, interactive=False):
        key = cmd if isinstance(cmd, str) else tuple(cmd)
        self.streamed.append(key)
        hook = self.on_stream.get(key)
        if hook:
            hook(self)
        return self.stream_rc.get(key, 0)


class ScriptedPrompter:
    """Answers prompts from a list, then with `default`; records every question."""

    def __init__(self, *answers, default=False):
        self.answers = list(answers)
        self.default = default
        self.questions = []

    def confirm(self, message):
        self.questions.append(message)
        if self.answers:
            return self.answers.pop(0)
        return self.default


def make_console():
    """Return a Console that captures output in a StringIO buffer."""
    buf = StringIO()
    con = Console(file=buf, theme=COURSECHECK_THEME, highlight=False, no_color=True, width=120)
    return con, buf


@pytest.fixture
def make_ctx():
    """Factory: make_ctx(host, prompter=None, installer_cls=BrewInstaller, ...) → (ctx, buf)."""

    def _make(host, prompter=None, installer_cls=BrewInstaller, allow_fixes=True, config=None):
        con, buf = make_console()
        ctx = RunContext(
            host=host,
            console=con,
            prompter=prompter or ScriptedPrompter(),
            installer=installer_cls(host, con),
            config=config or default_config(),
            allow_fixes=allow_fixes,
        )
        return ctx, buf

    return _make
