"""
Tests for the shell core: parsing, dispatch, prompt, login and main loop.
"""

from conftest import scripted
from core import Core, ParsedArgument, parse_args, tokenize
from errors import UsageError
from vfs import FileSystem


# -----------------------------------------------------------------------------
# Parsing
# -----------------------------------------------------------------------------

def test_tokenize_trims_trailing_whitespace():
    assert tokenize("ls -l   ") == ["ls", "-l"]


def test_tokenize_keeps_quoted_tokens():
    assert tokenize('date "%d %m" "01 02"') == ["date", "%d %m", "01 02"]


def test_parse_args_splits_options_and_parameters():
    arg = parse_args(["ls", "-l", "tmp", "-a", "usr"])
    assert arg.program_name == "ls"
    assert arg.options == ["-l", "-a"]
    assert arg.parameters == ["tmp", "usr"]
    assert arg.has_options and arg.has_parameters


def test_parse_args_program_only():
    arg = parse_args(["shutdown"])
    assert arg.options == [] and arg.parameters == []
    assert not arg.has_options and not arg.has_parameters


def test_parse_args_empty():
    assert parse_args([]) is None


# -----------------------------------------------------------------------------
# Dispatch
# -----------------------------------------------------------------------------

def test_unknown_command(shell):
    assert shell.execute_command("format c:") == "command not found: format"


def test_blank_line_produces_nothing(shell):
    assert shell.execute_command("") == ""
    assert shell.execute_command("    ") == ""


def test_unbalanced_quote_reports_parse_error(shell):
    assert shell.execute_command('mkdir "abc').startswith("Error parsing command:")


def test_command_names_are_case_sensitive(shell):
    assert shell.execute_command("LS") == "command not found: LS"


def test_register_replaces_existing_command(shell):
    shell.register("ls", lambda arg, core: "replaced", "Replacement")
    assert shell.execute_command("ls") == "replaced"
    assert shell.descriptions["ls"] == "Replacement"


def test_dispatch_records_last_argument(shell):
    shell.execute_command("ls -l")
    assert shell.arg.program_name == "ls"
    assert shell.arg.options == ["-l"]


def test_dispatch_reports_usage_errors(shell):
    def broken(arg, core):
        raise UsageError("bad usage")

    shell.register("broken", broken)
    assert shell.execute_command("broken") == "broken: bad usage"


def test_dispatch_never_raises(shell):
    def crash(arg, core):
        raise RuntimeError("boom")

    shell.register("crash", crash)
    assert shell.execute_command("crash") == "Error executing crash: boom"
    assert shell.is_running


def test_dispatch_none_result_is_empty(shell):
    shell.register("quiet", lambda arg, core: None)
    assert shell.dispatch(ParsedArgument("quiet")) == ""


# -----------------------------------------------------------------------------
# Prompt and login
# -----------------------------------------------------------------------------

def test_prompt_at_root(shell):
    assert shell.get_prompt() == "root@desktop:/$ "


def test_prompt_in_nested_directory(shell):
    shell.execute_command("cd usr")
    shell.execute_command("cd bin")
    assert shell.get_prompt() == "root@desktop:/usr/bin$ "


def test_authenticate_accepts_known_account(fs):
    core = Core(fs)
    assert core.state == "authenticating"
    assert core.authenticate(scripted(["user", "12345678"])) is True
    assert core.current_user.login == "user"
    assert not core.current_user.is_superuser
    assert core.is_running


def test_authenticate_rejects_wrong_password(fs, capsys):
    core = Core(fs)
    assert core.authenticate(scripted(["root", "wrong"])) is False
    assert core.current_user is None
    assert core.state == "authenticating"
    assert "invalid login" in capsys.readouterr().out


# -----------------------------------------------------------------------------
# Main loop
# -----------------------------------------------------------------------------

def test_run_shell_session(fs, capsys):
    core = Core(fs)
    core.run_shell(scripted([
        "nobody", "nothing",
        "root", "12345678",
        "mkdir docs",
        "ls",
        "bogus",
        "shutdown",
        "ls",
    ]))

    out = capsys.readouterr().out
    assert out.count("invalid login") == 1
    assert "tmp sys usr log.txt docs" in out
    assert "command not found: bogus" in out
    assert core.state == "terminated"
    assert core.current_user.is_superuser


def test_run_shell_ends_on_end_of_input(fs):
    core = Core(fs)
    core.run_shell(scripted(["root", "12345678", "cd tmp"]))
    assert core.state == "terminated"
    assert core.cwd.segments == ["/", "tmp"]


def test_run_shell_survives_keyboard_interrupt(fs, capsys):
    lines = iter(["root", "12345678", None, "shutdown"])

    def read(prompt=""):
        line = next(lines)
        if line is None:
            raise KeyboardInterrupt
        return line

    core = Core(fs)
    core.run_shell(read)
    assert "Use 'shutdown'" in capsys.readouterr().out
    assert core.state == "terminated"


def test_shells_do_not_share_trees():
    first, second = FileSystem(), FileSystem()
    Core(first).execute_command("mkdir only_here")
    assert [node.name for node in first.children()] == ["only_here"]
    assert second.children() == []


def test_tokenize_keeps_backslashes():
    assert tokenize(r"mkdir a\b c\ d") == ["mkdir", "a\\b", "c\\", "d"]


def test_tokenize_keeps_hash_characters():
    assert tokenize("mkdir a#b") == ["mkdir", "a#b"]
