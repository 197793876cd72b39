"""
Read completion handling of the desktop controller, with recording fakes
instead of widgets (no display needed).

Run from project root: pytest tests/test_app_controller.py -v
"""

from concurrent.futures import Future

import pytest

pytest.importorskip("tkinter")
pytest.importorskip("customtkinter")

from rawconv.controllers.app_controller import AppController
from rawconv.models.raw_model import RawAsset


class Recorder:
    """Accepts any method call and remembers its name."""

    def __init__(self):
        self.calls = []

    def __getattr__(self, name):
        def record(*args, **kwargs):
            self.calls.append(name)
            return 100
        return record


@pytest.fixture
def controller():
    ctrl = AppController(viewer=Recorder(), sidebar=Recorder(), bottom=Recorder(), window=Recorder())
    yield ctrl
    ctrl.shutdown()


def _done(asset):
    future = Future()
    future.set_result(asset)
    return future


def test_current_read_refreshes_view(controller):
    ticket = controller._coordinator.begin_read()
    controller._poll_read(ticket, _done(RawAsset(name="a.raw", data=bytes(16))))
    assert controller._coordinator.session.asset.name == "a.raw"
    assert "set_image" in controller.viewer.calls
    assert "set_session_info" in controller.sidebar.calls


def test_superseded_read_leaves_view_alone(controller):
    """A read overtaken by a newer one neither changes the session nor resets the view."""
    stale = controller._coordinator.begin_read()
    controller._coordinator.begin_read()

    controller._poll_read(stale, _done(RawAsset(name="old.raw", data=bytes(16))))

    assert controller._coordinator.session.asset is None
    assert controller.viewer.calls == []
    assert controller.sidebar.calls == []
    assert controller.bottom.calls == []
