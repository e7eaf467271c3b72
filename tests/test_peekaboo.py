"""Tests for the peekaboo wrapper: envelope handling, flags and helpers."""

import json
from unittest.mock import MagicMock, patch

import pytest

from agent_scripts.config.models import PeekabooConfig
from agent_scripts.peekaboo import (
    DetectionResult,
    FocusOptions,
    PeekabooClient,
    TargetOptions,
    UIElement,
    click_text,
    detect_elements,
    find_element,
    find_elements_by_role,
    quick_app_screenshot,
    wait_for_element,
    with_app,
)
from agent_scripts.results import CommandError, CommandResult


def _ok(data):
    return json.dumps({"success": True, "data": data})


SEE_DATA = {
    "snapshot_id": "snap-1",
    "screenshot_raw": "/tmp/raw.png",
    "screenshot_annotated": "/tmp/annotated.png",
    "application_name": "Safari",
    "element_count": 3,
    "ui_elements": [
        {"id": "B1", "role": "button", "label": "Save Draft", "is_actionable": True},
        {"id": "B2", "role": "button", "label": "Cancel"},
        {"id": "T1", "role": "textField", "label": None},
    ],
}


@pytest.fixture
def client():
    return PeekabooClient(PeekabooConfig(timeout=9, launch_settle=0.25))


def _argv(mock_run):
    return mock_run.call_args.args[0]


# ---------------------------------------------------------------------------
# Envelope handling
# ---------------------------------------------------------------------------


class TestEnvelope:
    def test_data_unwrapped_once(self, client, mock_run, completed):
        mock_run.return_value = completed(_ok({"data": {"inner": 1}}))
        assert client.command("list apps").data == {"data": {"inner": 1}}
        mock_run.assert_called_once_with(["peekaboo", "list", "apps", "--json"], timeout=9)

    def test_unsuccessful_envelope(self, client, mock_run, completed):
        mock_run.return_value = completed(
            json.dumps({"success": False, "error": {"message": "App not found", "code": "X"}})
        )
        result = client.command("app launch", ["Nope"])
        assert not result.success
        assert result.error == "App not found"

    def test_error_on_stderr_with_exit_code(self, client, mock_run, completed):
        mock_run.return_value = completed(
            returncode=1, stderr=json.dumps({"success": False, "error": "Permission denied"})
        )
        assert client.command("see").error == "Permission denied"

    def test_plain_stderr(self, client, mock_run, completed):
        mock_run.return_value = completed(returncode=1, stderr="segfault")
        assert client.command("see").error == "segfault"

    def test_json_without_envelope(self, client, mock_run, completed):
        mock_run.return_value = completed('[{"name": "Finder"}]')
        assert client.command("list apps").data == [{"name": "Finder"}]

    def test_text_output(self, client, mock_run, completed):
        mock_run.return_value = completed("done\n")
        assert client.command("sleep", ["10"]).data == "done"

    def test_raw_skips_json_flag(self, client, mock_run, completed):
        mock_run.return_value = completed("Peekaboo 3.0\n")
        assert client.raw("--version").data == "Peekaboo 3.0"
        assert _argv(mock_run) == ["peekaboo", "--version"]

    def test_raw_empty_output(self, client, mock_run, completed):
        mock_run.return_value = completed("")
        assert client.raw("clean").data is None


# ---------------------------------------------------------------------------
# Flag building
# ---------------------------------------------------------------------------


class TestOptionGroups:
    def test_target_flags(self):
        target = TargetOptions(app="Safari", window_index=0, snapshot="s1")
        assert target.flags() == ["--snapshot", "s1", "--app", "Safari", "--window-index", "0"]

    def test_focus_flags(self):
        focus = FocusOptions(no_auto_focus=True, focus_retry_count=2)
        assert focus.flags() == ["--no-auto-focus", "--focus-retry-count", "2"]


class TestCommands:
    def test_see(self, client, mock_run):
        client.capture.see(app="Safari", annotate=True)
        assert _argv(mock_run) == ["peekaboo", "see", "--app", "Safari", "--annotate", "--json"]

    def test_image(self, client, mock_run):
        client.capture.image(path="/tmp/x.png", mode="screen", retina=True)
        assert _argv(mock_run)[1:-1] == [
            "image", "--path", "/tmp/x.png", "--mode", "screen", "--retina",
        ]

    def test_click_coords_with_target(self, client, mock_run):
        client.input.click(coords=(10, 20), double=True, target=TargetOptions(app="Notes"))
        assert _argv(mock_run)[1:-1] == [
            "click", "--coords", "10,20", "--double", "--app", "Notes",
        ]

    def test_click_query(self, client, mock_run):
        client.input.click("Save", wait_for=500)
        assert _argv(mock_run)[1:-1] == ["click", "Save", "--wait-for", "500"]

    def test_type_return(self, client, mock_run):
        client.input.type("hello", press_return=True, clear=True)
        assert _argv(mock_run)[1:-1] == ["type", "hello", "--return", "--clear"]

    def test_press_sequence(self, client, mock_run):
        client.input.press(["tab", "tab", "return"], delay=50)
        assert _argv(mock_run)[1:-1] == ["press", "tab", "tab", "return", "--delay", "50"]

    def test_hotkey(self, client, mock_run):
        client.input.hotkey("cmd,shift,t", focus=FocusOptions(space_switch=True))
        assert _argv(mock_run)[1:-1] == ["hotkey", "cmd,shift,t", "--space-switch"]

    def test_scroll(self, client, mock_run):
        client.input.scroll("down", amount=5, smooth=True)
        assert _argv(mock_run)[1:-1] == [
            "scroll", "--direction", "down", "--amount", "5", "--smooth",
        ]

    def test_app_launch_open_repeated(self, client, mock_run):
        client.app.launch("Preview", open=["a.pdf", "b.pdf"], wait_until_ready=True)
        assert _argv(mock_run)[1:-1] == [
            "app", "launch", "Preview",
            "--open", "a.pdf", "--open", "b.pdf", "--wait-until-ready",
        ]

    def test_app_quit_except(self, client, mock_run):
        client.app.quit(all=True, except_apps=["Finder", "Terminal"])
        assert _argv(mock_run)[1:-1] == ["app", "quit", "--all", "--except", "Finder,Terminal"]

    def test_window_focus(self, client, mock_run):
        client.window.focus("Safari", title="Inbox")
        assert _argv(mock_run)[1:-1] == [
            "window", "focus", "--app", "Safari", "--window-title", "Inbox",
        ]

    def test_window_set_bounds(self, client, mock_run):
        client.window.set_bounds(0, 0, 800, 600, app="Notes")
        assert _argv(mock_run)[1:3] == ["window", "set-bounds"]

    def test_list_windows_details(self, client, mock_run):
        client.list.windows("Safari", include_details=["bounds", "ids"])
        assert _argv(mock_run)[1:-1] == [
            "list", "windows", "--app", "Safari", "--include-details", "bounds,ids",
        ]

    def test_clipboard_set(self, client, mock_run):
        client.clipboard.set(text="hi", verify=True)
        assert _argv(mock_run)[1:-1] == ["clipboard", "--action", "set", "--text", "hi", "--verify"]

    def test_menu_click(self, client, mock_run):
        client.menu.click("TextEdit", "File > Save")
        assert _argv(mock_run)[1:-1] == ["menu", "click", "--app", "TextEdit", "--path", "File > Save"]

    def test_dock_right_click(self, client, mock_run):
        client.dock.right_click("Finder", select="New Window")
        assert _argv(mock_run)[1:-1] == [
            "dock", "right-click", "--app", "Finder", "--select", "New Window",
        ]

    def test_open_url(self, client, mock_run):
        client.open("https://example.com", app="Safari", no_focus=True)
        assert _argv(mock_run)[1:-1] == [
            "open", "https://example.com", "--app", "Safari", "--no-focus",
        ]


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


class TestDetectionResult:
    def test_from_see(self):
        result = DetectionResult.from_see(SEE_DATA)
        assert result.snapshot_id == "snap-1"
        assert result.annotated_path == "/tmp/annotated.png"
        assert result.app_name == "Safari"
        assert [e.id for e in result.elements] == ["B1", "B2", "T1"]

    def test_empty(self):
        result = DetectionResult.from_see({})
        assert result.elements == []
        assert result.element_count == 0

    def test_element_matching(self):
        assert UIElement(id="a", label="Save Draft").matches("save")
        assert not UIElement(id="b", label=None).matches("save")


# ---------------------------------------------------------------------------
# Convenience helpers
# ---------------------------------------------------------------------------


class TestConvenience:
    def test_detect_annotates_by_default(self, client, mock_run, completed):
        mock_run.return_value = completed(_ok(SEE_DATA))
        result = detect_elements(client, app="Safari")
        assert result.element_count == 3
        assert "--annotate" in _argv(mock_run)

    def test_find_element(self, client, mock_run, completed):
        mock_run.return_value = completed(_ok(SEE_DATA))
        assert find_element(client, "cancel").id == "B2"

    def test_find_element_missing(self, client, mock_run, completed):
        mock_run.return_value = completed(_ok(SEE_DATA))
        assert find_element(client, "Delete") is None

    def test_find_by_role(self, client, mock_run, completed):
        mock_run.return_value = completed(_ok(SEE_DATA))
        assert [e.id for e in find_elements_by_role(client, "BUTTON")] == ["B1", "B2"]

    def test_click_text_clicks_element_id(self, client, mock_run, completed):
        mock_run.side_effect = [completed(_ok(SEE_DATA)), completed(_ok({}))]
        element = click_text(client, "Save")
        assert element.id == "B1"
        assert _argv(mock_run)[1:-1] == ["click", "--on", "B1"]

    def test_click_text_not_found(self, client, mock_run, completed):
        mock_run.return_value = completed(_ok(SEE_DATA))
        with pytest.raises(CommandError, match='Element with text "Publish" not found'):
            click_text(client, "Publish")

    def test_see_failure_raises(self, client, mock_run, completed):
        mock_run.return_value = completed(returncode=1, stderr="Screen recording denied")
        with pytest.raises(CommandError, match="Screen recording denied"):
            detect_elements(client)

    def test_quick_app_screenshot(self, client, mock_run, completed):
        mock_run.return_value = completed(_ok({"files": []}))
        assert quick_app_screenshot(client, "Notes", "/tmp/n.png") == "/tmp/n.png"
        assert _argv(mock_run)[1:-1] == ["image", "--app", "Notes", "--path", "/tmp/n.png"]

    @patch("agent_scripts.peekaboo.convenience.time.sleep")
    def test_with_app_quits_after(self, sleep, client, mock_run, completed):
        mock_run.return_value = completed(_ok({}))
        with with_app(client, "Notes", quit_after=True) as name:
            assert name == "Notes"
        sleep.assert_called_once_with(0.25)
        calls = [c.args[0][1:3] for c in mock_run.call_args_list]
        assert calls == [["app", "launch"], ["app", "quit"]]

    @patch("agent_scripts.peekaboo.convenience.time.sleep")
    def test_with_app_quit_failure_logged(self, _, client, mock_run, completed, caplog):
        mock_run.side_effect = [completed(_ok({})), completed(returncode=1, stderr="busy")]
        with with_app(client, "Notes", quit_after=True):
            pass
        assert "Could not quit Notes" in caplog.text


class TestWaitForElement:
    def test_found_after_retry(self):
        client = MagicMock(name="PeekabooClient")
        client.config = PeekabooConfig()
        client.capture.see.side_effect = [
            CommandResult.ok({"ui_elements": []}),
            CommandResult.ok(SEE_DATA),
        ]
        with patch("agent_scripts.peekaboo.convenience.time.sleep") as sleep:
            element = wait_for_element(client, "Cancel", timeout=5, interval=0.1)
        assert element.id == "B2"
        sleep.assert_called_once_with(0.1)

    @patch("agent_scripts.peekaboo.convenience.time.sleep")
    @patch("agent_scripts.peekaboo.convenience.time.monotonic", side_effect=[0.0, 0.0, 50.0])
    def test_timeout(self, _monotonic, _sleep):
        client = MagicMock(name="PeekabooClient")
        client.config = PeekabooConfig()
        client.capture.see.return_value = CommandResult.ok({"ui_elements": []})
        with pytest.raises(CommandError, match='Timeout waiting for element with text "Go"'):
            wait_for_element(client, "Go", timeout=1)
