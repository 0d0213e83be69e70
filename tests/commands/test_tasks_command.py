"""Tests for task commands."""
# pylint: disable=redefined-outer-name

import pytest
from typer.testing import CliRunner

from pomopro_cli.commands.tasks import app
from pomopro_cli.services.storage_service import get_focus_repository
from pomopro_cli.services.task_service import TaskService

runner = CliRunner()


@pytest.fixture
def repo(app_dirs):
    return get_focus_repository()


class TestTaskCommands:
    def test_add(self, repo):
        result = runner.invoke(app, ["add", "Write report", "-d", "Q3", "-e", "3"])

        assert result.exit_code == 0
        assert "Task created: Write report" in result.stdout
        [task] = repo.load_tasks()
        assert (task.description, task.estimated_pomodoros) == ("Q3", 3)

    def test_add_empty_title(self, repo):
        result = runner.invoke(app, ["add", "  "])

        assert result.exit_code == 2
        assert "cannot be empty" in result.stdout

    def test_list_empty(self, repo):
        result = runner.invoke(app, ["list"])

        assert result.exit_code == 0
        assert "No tasks found" in result.stdout

    def test_list_hides_completed_by_default(self, repo):
        runner.invoke(app, ["add", "Open"])
        runner.invoke(app, ["add", "Closed"])
        closed = repo.load_tasks()[1]
        runner.invoke(app, ["done", closed.id])

        result = runner.invoke(app, ["list"])
        assert "Open" in result.stdout
        assert "Closed" not in result.stdout

        result = runner.invoke(app, ["list", "--all"])
        assert "Closed" in result.stdout

    def test_done_toggles(self, repo):
        runner.invoke(app, ["add", "Write"])
        task = repo.load_tasks()[0]

        result = runner.invoke(app, ["done", task.id])
        assert "Task completed: Write" in result.stdout

        result = runner.invoke(app, ["done", task.id])
        assert "Task reopened: Write" in result.stdout

    def test_done_unknown(self, repo):
        result = runner.invoke(app, ["done", "missing"])

        assert result.exit_code == 5

    def test_delete(self, repo):
        runner.invoke(app, ["add", "Write"])
        task = repo.load_tasks()[0]

        result = runner.invoke(app, ["delete", task.id])

        assert result.exit_code == 0
        assert repo.load_tasks() == []

    def test_list_marks_tasks_on_target(self, repo):
        runner.invoke(app, ["add", "Reached", "-e", "1"])
        task = repo.load_tasks()[0]
        TaskService(repo).increment_pomodoros(task.id)

        result = runner.invoke(app, ["list"])

        assert "◎" in result.stdout


class TestShowTask:
    def test_show_with_sessions(self, repo, make_session):
        runner.invoke(app, ["add", "Write report", "-d", "Q3", "-e", "1"])
        task = repo.load_tasks()[0]
        repo.append_session(make_session(task_id=task.id, mood=4))
        TaskService(repo).increment_pomodoros(task.id)

        result = runner.invoke(app, ["show", task.id])

        assert result.exit_code == 0
        assert "Write report" in result.stdout
        assert "Pomodoros: 1/1" in result.stdout
        assert "estimate reached" in result.stdout
        assert "Sessions (1)" in result.stdout
        assert "25m 00s" in result.stdout

    def test_show_without_sessions(self, repo):
        runner.invoke(app, ["add", "Write"])
        task = repo.load_tasks()[0]

        result = runner.invoke(app, ["show", task.id])

        assert result.exit_code == 0
        assert "No sessions recorded for this task" in result.stdout

    def test_show_unknown(self, repo):
        result = runner.invoke(app, ["show", "missing"])

        assert result.exit_code == 5
