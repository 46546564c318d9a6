from __future__ import annotations

import io

from flowkit.runtime.config import load_flowkit_config
from itembrowser.app.bootstrap import AppGraph, build_app
from itembrowser.infra.config import AppConfig
from itembrowser.ui.console import ConsoleHost, split_script
from tests.itembrowser.helpers import ITEMS, StaticItemSource


def _graph() -> AppGraph:
    return build_app(
        config=load_flowkit_config(env={"FLOWKIT_PROFILE": "dev"}),
        app_config=AppConfig(),
        source=StaticItemSource(ITEMS),
        threaded=False,
    )


def test_split_script_drops_blank_commands() -> None:
    assert split_script("open 0; ;back;  done ") == ["open 0", "back", "done"]


def test_console_session_browses_and_finishes() -> None:
    graph = _graph()
    output = io.StringIO()
    try:
        status = ConsoleHost(graph, output=output).run(["open 0", "back", "done", "open 1"])
    finally:
        graph.close()

    lines = output.getvalue().splitlines()
    assert status == 0
    assert lines[0] == "Items"
    assert "Items > Alice Smith" in lines
    assert "== AS Alice Smith ==" in lines
    assert lines[-1] == "(idle)"
    assert len(graph.root.finished_children) == 1
    assert graph.stack.is_empty


def test_console_reports_unknown_commands_and_quits() -> None:
    graph = _graph()
    output = io.StringIO()
    host = ConsoleHost(graph, output=output)
    try:
        host.run([])
        assert host.execute("jump")
        assert not host.execute("quit")
    finally:
        graph.close()

    assert "unknown command for Items: jump" in output.getvalue()
    assert graph.stack.is_empty


def test_console_back_on_list_finishes_flow() -> None:
    graph = _graph()
    output = io.StringIO()
    host = ConsoleHost(graph, output=output)
    try:
        host.run([])
        assert not host.execute("back")
        assert not host.execute("refresh")
    finally:
        graph.close()

    assert output.getvalue().splitlines()[-1] == "(nothing to show)"
    assert graph.root.finished_children
