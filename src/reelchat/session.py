"""Chat session orchestration.

Owns the conversation state for one chat and drives the send-message flow:

    IDLE --submit--> AWAITING_GATEWAY --reply--> REVEALING --done--> IDLE
                              |
                              +--GatewayError--> IDLE (user turn rolled back)

The presentation layer holds a reference to the session and renders what
it reports through a SessionObserver; it never mutates session state.
"""

import asyncio
from collections.abc import Callable
from enum import Enum

from .cancellation import CancellationToken, OperationCancelled
from .catalog import CatalogStore, default_catalog, select_context
from .conversation import ConversationHistory, ModelMessage, UserMessage
from .gateway import GatewayError, ResponseGateway
from .gateway.errors import UNKNOWN_SERVER_ERROR
from .prompts import build_system_instruction
from .reveal import RevealScheduler

DEFAULT_GREETING = (
    "Hello! I am your personalized Netflix Chatbot. Ask me about our titles, "
    "like 'Queen's Gambit' or 'recommend a sci-fi show'."
)

DebugCallback = Callable[[str, str, str], None]


class SessionState(str, Enum):
    """Send-flow states of a chat session."""

    IDLE = "idle"
    AWAITING_GATEWAY = "awaiting_gateway"
    REVEALING = "revealing"


class SessionObserver:
    """Receives session updates. Override the hooks you need."""

    def on_state_changed(self, state: SessionState) -> None:
        pass

    def on_user_message(self, message: UserMessage) -> None:
        pass

    def on_user_message_removed(self, message: UserMessage) -> None:
        pass

    def on_reveal_step(self, visible_text: str) -> None:
        pass

    def on_model_message(self, message: ModelMessage) -> None:
        pass

    def on_error(self, message: str) -> None:
        pass


class ChatSession:
    """One conversation with the catalog-grounded model.

    At most one send is in flight: submissions are rejected unless the
    session is IDLE.
    """

    def __init__(
        self,
        gateway: ResponseGateway,
        catalog: CatalogStore | None = None,
        reveal: RevealScheduler | None = None,
        observer: SessionObserver | None = None,
        greeting: str | None = DEFAULT_GREETING,
        base_prompt: str | None = None,
    ) -> None:
        self._gateway = gateway
        self._catalog = catalog if catalog is not None else default_catalog()
        self._reveal = reveal if reveal is not None else RevealScheduler()
        self._observer = observer or SessionObserver()
        self._greeting = greeting
        self._base_prompt = base_prompt
        self._token = CancellationToken()
        self._state = SessionState.IDLE
        self._debug_callback: DebugCallback | None = None
        self.error: str | None = None
        self.history = ConversationHistory()
        if greeting:
            self.history.append(ModelMessage(text=greeting))

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def catalog(self) -> CatalogStore:
        return self._catalog

    @property
    def gateway(self) -> ResponseGateway:
        return self._gateway

    @property
    def closed(self) -> bool:
        return self._token.cancelled

    @property
    def revealing_text(self) -> str:
        """Visible prefix of the answer being revealed ("" when none)."""
        state = self._reveal.state
        return state.visible_text if state is not None else ""

    def set_observer(self, observer: SessionObserver | None) -> None:
        self._observer = observer or SessionObserver()

    def set_debug_callback(self, callback: DebugCallback | None) -> None:
        """Set the callback receiving (level, component, message) log lines.

        The callback is shared with the gateway.
        """
        self._debug_callback = callback
        self._gateway.set_debug_callback(callback)

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback is not None:
            self._debug_callback(level, "Session", message)

    def _set_state(self, state: SessionState) -> None:
        self._state = state
        self._observer.on_state_changed(state)

    def build_instruction(self, text: str) -> str:
        """Build the system instruction for a query."""
        context = select_context(text, self._catalog)
        if context:
            self._debug("debug", f"Grounding context: {len(context)} chars")
        else:
            self._debug("debug", "No grounding context selected")
        return build_system_instruction(context, self._base_prompt)

    async def submit(self, text: str) -> bool:
        """Send a user message and reveal the answer.

        Returns once the answer is committed, the call failed, or the session
        was closed.

        Args:
            text: Raw user input

        Returns:
            True if a model answer was committed to history
        """
        text = text.strip()
        if not text:
            self._debug("debug", "Ignored empty submission")
            return False
        if self.closed:
            self._debug("debug", "Ignored submission on closed session")
            return False
        if self._state is not SessionState.IDLE:
            self._debug("debug", f"Ignored submission while {self._state.value}")
            return False

        instruction = self.build_instruction(text)

        self.error = None
        user_message = UserMessage(text=text)
        self.history.append(user_message)
        self._observer.on_user_message(user_message)
        self._set_state(SessionState.AWAITING_GATEWAY)
        self._debug("info", f"Sending: '{text[:50]}'")

        try:
            reply = await self._gateway.generate(
                self.history.messages, instruction, token=self._token
            )
        except OperationCancelled:
            self._debug("debug", "Gateway call abandoned after close")
            return False
        except GatewayError as e:
            self._rollback(user_message)
            self._fail(e.message)
            return False
        except Exception as e:
            self._debug("error", f"Unexpected gateway failure: {type(e).__name__}")
            self._rollback(user_message)
            self._fail(str(e) or UNKNOWN_SERVER_ERROR)
            return False
        except asyncio.CancelledError:
            # Caller cancelled the send itself; behave as if it never happened
            self._rollback(user_message)
            self._set_state(SessionState.IDLE)
            raise

        if self.closed:
            return False

        committed: list[ModelMessage] = []

        def _on_complete(full_text: str) -> None:
            committed.append(self._commit(full_text))

        self._set_state(SessionState.REVEALING)
        self._reveal.start(
            reply,
            on_step=lambda text: self._observer.on_reveal_step(text),
            on_complete=_on_complete,
            token=self._token,
        )
        try:
            await self._reveal.wait()
        except asyncio.CancelledError:
            self._reveal.cancel()
            if not committed:
                self._rollback(user_message)
            self._set_state(SessionState.IDLE)
            raise

        if not committed and self._state is SessionState.REVEALING:
            self._set_state(SessionState.IDLE)
        return bool(committed)

    def _rollback(self, user_message: UserMessage) -> None:
        if self.history.last is user_message:
            self.history.remove_last()
            self._observer.on_user_message_removed(user_message)

    def _fail(self, error: str) -> None:
        self.error = error
        self._debug("error", f"Gateway error: {error}")
        self._set_state(SessionState.IDLE)
        self._observer.on_error(error)

    def _commit(self, full_text: str) -> ModelMessage:
        message = ModelMessage(text=full_text)
        self.history.append(message)
        self._debug("info", f"Committed reply ({len(full_text)} chars)")
        self._set_state(SessionState.IDLE)
        self._observer.on_model_message(message)
        return message

    def reset(self) -> bool:
        """Clear the conversation back to the greeting.

        Returns:
            False if a send is in flight (nothing is cleared)
        """
        if self._state is not SessionState.IDLE:
            return False
        self.history.clear()
        self.error = None
        if self._greeting:
            self.history.append(ModelMessage(text=self._greeting))
        return True

    def close(self) -> None:
        """Tear down the session.

        Pending gateway calls and reveals are abandoned and never update
        history afterwards.
        """
        if self.closed:
            return
        self._token.cancel()
        self._reveal.cancel()
        self._state = SessionState.IDLE
        self._debug("debug", "Session closed")

    async def aclose(self) -> None:
        """Close the session and the gateway."""
        self.close()
        await self._gateway.close()
