"""Pytest configuration and shared fixtures."""
import asyncio

import pytest

from reelchat.catalog import default_catalog
from reelchat.gateway import GatewayError, ResponseGateway
from reelchat.reveal import RevealScheduler
from reelchat.session import ChatSession, SessionObserver


class FakeGateway(ResponseGateway):
    """Gateway returning scripted replies and recording every call.

    Each script item is either a reply string or an exception to raise.
    """

    def __init__(self, *script, delay: float = 0.0):
        self.script = list(script)
        self.delay = delay
        self.calls: list[tuple[list, str]] = []
        self.closed = False

    @property
    def backend_type(self) -> str:
        return "fake"

    async def generate(self, history, system_instruction, token=None):
        self.calls.append((list(history), system_instruction))
        item = self.script.pop(0) if self.script else "ok"

        async def _respond():
            if self.delay:
                await asyncio.sleep(self.delay)
            if isinstance(item, Exception):
                raise item
            return item

        if token is not None:
            return await token.run(_respond())
        return await _respond()

    async def close(self) -> None:
        self.closed = True


class RecordingObserver(SessionObserver):
    """Observer keeping every event for assertions."""

    def __init__(self):
        self.events: list[tuple[str, object]] = []

    def on_state_changed(self, state):
        self.events.append(("state", state))

    def on_user_message(self, message):
        self.events.append(("user", message.text))

    def on_user_message_removed(self, message):
        self.events.append(("removed", message.text))

    def on_reveal_step(self, visible_text):
        self.events.append(("step", visible_text))

    def on_model_message(self, message):
        self.events.append(("model", message.text))

    def on_error(self, message):
        self.events.append(("error", message))

    def of(self, kind: str) -> list:
        return [payload for name, payload in self.events if name == kind]


@pytest.fixture
def catalog():
    """Return the built-in catalog."""
    return default_catalog()


@pytest.fixture
def instant_reveal():
    """Reveal scheduler without pacing delay."""
    return RevealScheduler(interval=0)


@pytest.fixture
def observer():
    return RecordingObserver()


@pytest.fixture
def make_session(catalog, instant_reveal, observer):
    """Build a session around a FakeGateway scripted with the given items."""
    def _make(*script, delay: float = 0.0, reveal=None, **kwargs):
        gateway = FakeGateway(*script, delay=delay)
        session = ChatSession(
            gateway=gateway,
            catalog=catalog,
            reveal=reveal or instant_reveal,
            observer=observer,
            **kwargs,
        )
        return session, gateway
    return _make


@pytest.fixture
def gateway_failure():
    return GatewayError("quota exceeded", status_code=429)
