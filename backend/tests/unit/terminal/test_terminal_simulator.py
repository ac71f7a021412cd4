"""
Unit Tests for the Terminal Simulator
"""
import pytest

from app.modules.terminal import (
    LineType,
    TerminalSession,
    calculate,
    execute_command,
    history_entry,
)
from app.modules.filetree import rename_node


def texts(result):
    return [line.text for line in result.lines]


class TestExecuteCommand:
    """Test command dispatch and history"""

    def test_blank_input_is_a_no_op(self, sample_tree):
        session = TerminalSession()
        result = execute_command(sample_tree, session, "   ")

        assert result.lines == []
        assert result.session is session

    def test_command_is_echoed_and_recorded(self, sample_tree):
        result = execute_command(sample_tree, TerminalSession(), "  pwd  ")

        assert result.lines[0].type == LineType.COMMAND
        assert result.lines[0].text == "$ pwd"
        assert result.lines[1].text == "/project-root"
        assert result.session.history == ("pwd",)

    def test_command_names_are_case_insensitive(self, sample_tree):
        assert texts(execute_command(sample_tree, TerminalSession(), "WHOAMI"))[1] == "user"

    def test_unknown_command(self, sample_tree):
        result = execute_command(sample_tree, TerminalSession(), "rm -rf /")

        assert result.lines[1].type == LineType.ERROR
        assert result.lines[1].text == "bash: rm: command not found"
        assert result.lines[2].type == LineType.INFO
        assert result.session.history == ("rm -rf /",)

    def test_clear_empties_output_but_is_recorded(self, sample_tree):
        result = execute_command(sample_tree, TerminalSession(history=("ls",)), "clear")

        assert result.clear is True
        assert result.lines == []
        assert result.session.history == ("ls", "clear")

    def test_help_lists_commands(self, sample_tree):
        output = texts(execute_command(sample_tree, TerminalSession(), "help"))
        assert output[1] == "Available commands:"
        assert any(line.strip().startswith("calc") for line in output)


class TestFilesystemCommands:
    """Test ls, cd, cat and tree against the virtual tree"""

    def test_ls_current_directory(self, sample_tree):
        output = texts(execute_command(sample_tree, TerminalSession(), "ls"))
        assert output[1:] == ["📁 src", "📄 README.md", "📄 empty.txt"]

    def test_ls_relative_path(self, sample_tree):
        output = texts(execute_command(sample_tree, TerminalSession(), "ls src/components"))
        assert output[1:] == ["📄 Button.jsx"]

    def test_ls_empty_directory(self):
        from app.modules.filetree import FolderNode

        tree = FolderNode(name="project-root")
        assert texts(execute_command(tree, TerminalSession(), "ls"))[1] == "(empty directory)"

    def test_ls_missing_directory(self, sample_tree):
        result = execute_command(sample_tree, TerminalSession(), "ls nowhere")
        assert result.lines[1].type == LineType.ERROR
        assert result.lines[1].text == "Directory not found"

    def test_cd_into_folder_and_back(self, sample_tree):
        result = execute_command(sample_tree, TerminalSession(), "cd src")
        assert texts(result)[1] == "Changed to /project-root/src"
        assert result.session.cwd == "/project-root/src"

        result = execute_command(sample_tree, result.session, "cd ..")
        assert result.session.cwd == "/project-root"

    def test_cd_up_at_root_stays_put(self, sample_tree):
        result = execute_command(sample_tree, TerminalSession(), "cd ..")

        assert result.session.cwd == "/project-root"
        assert texts(result) == ["$ cd .."]

    def test_cd_without_argument_goes_to_root(self, sample_tree):
        result = execute_command(sample_tree, TerminalSession(cwd="/project-root/src/utils"), "cd")
        assert result.session.cwd == "/project-root"

    def test_cd_into_file_is_rejected(self, sample_tree):
        result = execute_command(sample_tree, TerminalSession(), "cd README.md")

        assert result.lines[1].text == "Directory not found or not a folder"
        assert result.session.cwd == "/project-root"

    def test_cd_absolute_path(self, sample_tree):
        result = execute_command(sample_tree, TerminalSession(cwd="/project-root/src"), "cd /project-root/src/hooks")
        assert result.session.cwd == "/project-root/src/hooks"

    def test_cat_prints_each_line(self, sample_tree):
        output = texts(execute_command(sample_tree, TerminalSession(cwd="/project-root/src"), "cat components/Button.jsx"))
        assert output[1:] == ["export default function Button() {", "  return <button />;", "}"]

    def test_cat_empty_file(self, sample_tree):
        assert texts(execute_command(sample_tree, TerminalSession(), "cat empty.txt"))[1] == "(empty file)"

    def test_cat_errors(self, sample_tree):
        assert texts(execute_command(sample_tree, TerminalSession(), "cat"))[1] == "Usage: cat <filename>"
        assert texts(execute_command(sample_tree, TerminalSession(), "cat src"))[1] == "File not found or not a file"

    def test_tree_renders_whole_project(self, sample_tree):
        output = texts(execute_command(sample_tree, TerminalSession(), "tree"))
        assert output[1] == "└── 📁 project-root"
        assert len(output) == 1 + 13

    def test_default_session_follows_renamed_root(self, sample_tree):
        tree = rename_node(sample_tree, "project-root", "my-app")

        result = execute_command(tree, TerminalSession(), "ls")

        assert texts(result)[1:] == ["📁 src", "📄 README.md", "📄 empty.txt"]
        assert result.session.cwd == "/my-app"

    def test_cwd_inside_tree_is_kept(self, sample_tree):
        tree = rename_node(sample_tree, "project-root", "my-app")

        result = execute_command(tree, TerminalSession(cwd="/my-app/src"), "pwd")

        assert texts(result)[1] == "/my-app/src"


class TestSimpleCommands:
    """Test echo, uname and calc"""

    def test_echo_joins_arguments(self, sample_tree):
        assert texts(execute_command(sample_tree, TerminalSession(), "echo hello   world"))[1] == "hello world"

    def test_uname(self, sample_tree):
        assert texts(execute_command(sample_tree, TerminalSession(), "uname"))[1] == "WebTerminal"
        assert texts(execute_command(sample_tree, TerminalSession(), "uname -a"))[1] == (
            "WebTerminal 1.0.0 Browser-Based Terminal Emulator"
        )

    def test_calc(self, sample_tree):
        assert texts(execute_command(sample_tree, TerminalSession(), "calc 5 + 3"))[1] == "Result: 8"

    def test_calc_invalid_expression(self, sample_tree):
        result = execute_command(sample_tree, TerminalSession(), "calc __import__('os')")
        assert result.lines[1].type == LineType.ERROR
        assert result.lines[1].text == "Error: Invalid expression"


class TestCalculate:
    """Test the arithmetic evaluator"""

    @pytest.mark.parametrize("expression,expected", [
        ("5 + 3", "8"),
        ("10 / 4", "2.5"),
        ("10 / 2", "5"),
        ("2 ** 10", "1024"),
        ("-(3 - 5) * 2", "4"),
        ("7 // 2 + 7 % 2", "4"),
    ])
    def test_valid_expressions(self, expression, expected):
        assert calculate(expression) == expected

    @pytest.mark.parametrize("expression", [
        "", "1 / 0", "abs(-1)", "x + 1", "2 ** 5000", "'a' * 3",
        "((9**999)**999)**999", "(2**999) ** 999", "(9**999) * (9**999) * (9**999) * (9**999)",
    ])
    def test_invalid_expressions(self, expression):
        with pytest.raises(ValueError):
            calculate(expression)


class TestHistoryEntry:
    """Test ArrowUp / ArrowDown navigation"""

    def test_up_from_fresh_line_returns_latest(self):
        session = TerminalSession(history=("ls", "pwd", "tree"))
        assert history_entry(session, -1, "up") == (2, "tree")

    def test_up_stops_at_oldest(self):
        session = TerminalSession(history=("ls", "pwd"))
        assert history_entry(session, 0, "up") == (0, "ls")

    def test_down_walks_forward_then_clears(self):
        session = TerminalSession(history=("ls", "pwd"))

        assert history_entry(session, 0, "down") == (1, "pwd")
        assert history_entry(session, 1, "down") == (-1, "")

    def test_stale_index_restarts_from_latest(self):
        session = TerminalSession(history=("ls",))
        assert history_entry(session, 5, "up") == (0, "ls")

    def test_empty_history(self):
        assert history_entry(TerminalSession(), -1, "up") == (-1, "")

    def test_unknown_direction(self):
        with pytest.raises(ValueError):
            history_entry(TerminalSession(), -1, "left")
