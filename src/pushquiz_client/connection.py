# Area: Session
"""
pushquiz_client.connection — Participant session connection
===========================================================

Owns the transport for one room and wires inbound events and user
actions to the session components:

    inbound frame ──► decode ──► validate ──► MessageRouter ──► handlers
                                                 │
                       DeadlineTimer ◄───────────┤
                       AnswerCorrelator ◄────────┘
    submit_answer() ──► AnswerCorrelator ──► answer.submit
    request_close() ──► CloseCoordinator ──► close(1000, "client-closed")

Everything runs on one event loop. Waiting is done with scheduled
callbacks (countdown ticks, grace-period timeout), never by blocking.
There is no automatic reconnection; a closed session stays closed until
connect() is called again.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

from ._runner_config import parse_bool, validate_config, with_defaults
from ._session.close_coordinator import CloseCoordinator
from ._session.correlator import AnswerCorrelator, PendingCorrelation
from ._session.deadline_timer import DeadlineTimer
from ._session.enums import CloseState, ResolutionReason, SessionPhase, SubmitStatus
from ._session.incoming_validator import validate_envelope
from ._session.messages import parse_inbound
from ._session.router import MessageRouter
from ._session.scheduling import Clock, LoopScheduler, Scheduler
from ._session.snapshot import build_state_snapshot
from ._session.state import SessionState
from ._shared.logging_config import log_protocol_error
from ._shared.protocol import (
    ANSWER_SUBMIT,
    AUTH_JOIN,
    CLIENT_CLOSED_REASON,
    HOST_START,
    NORMAL_CLOSURE,
    build_envelope,
    build_play_url,
    current_timestamp_ms,
    decode_envelope,
    encode_envelope,
    local_timezone_name,
)
from ._shared.protocol_logger import ProtocolLogger
from .errors import (
    AlreadyConnectedError,
    InvalidPayloadError,
    MalformedMessageError,
    NotConnectedError,
    TransportError,
    UnknownMessageTypeError,
)
from .transport import Frame, Transport, TransportFactory, WebSocketTransport
from .types import AnswerSubmitPayload, AuthJoinPayload, HostStartPayload, SessionSnapshot

logger = logging.getLogger("pushquiz_client.connection")

Observer = Callable[[SessionSnapshot], None]


class SessionConnection:
    """
    One participant's connection to a quiz room.

    Observers registered with add_observer() receive a state snapshot
    after every change (including countdown ticks).
    """

    def __init__(
        self,
        config: Dict[str, Any],
        transport_factory: Optional[TransportFactory] = None,
        clock: Optional[Clock] = None,
        scheduler: Optional[Scheduler] = None,
        protocol_logger: Optional[ProtocolLogger] = None,
    ):
        self.config = with_defaults(config)
        validate_config(self.config)

        self._transport_factory = transport_factory or WebSocketTransport.open
        self._clock = clock or current_timestamp_ms
        self._scheduler = scheduler or LoopScheduler()
        self.protocol_logger = protocol_logger or ProtocolLogger()
        self.protocol_logger.set_room_id(self.config["room_id"])

        self.phase = SessionPhase.DISCONNECTED
        self.transport: Optional[Transport] = None
        self._observers: List[Observer] = []
        self._build_session()

    # ── Session components ───────────────────────────────────

    def _build_session(self) -> None:
        """Create fresh per-connection state and components."""
        self.state = SessionState(
            room_id=self.config["room_id"],
            user_id=self.config["user_id"],
        )
        self.timer = DeadlineTimer(
            scheduler=self._scheduler,
            clock=self._clock,
            tick_interval=float(self.config["tick_interval_seconds"]),
            on_tick=lambda remaining, fraction: self._notify(),
        )
        self.correlator = AnswerCorrelator(
            scheduler=self._scheduler,
            timer=self.timer,
            clock=self._clock,
            grace_period_seconds=float(self.config["grace_period_seconds"]),
        )
        self.correlator.add_listener(self._on_correlation_resolved)
        self.closer = CloseCoordinator(self.correlator, self._close_transport)
        self.router = MessageRouter(
            state=self.state,
            timer=self.timer,
            correlator=self.correlator,
            protocol_logger=self.protocol_logger,
        )

    @property
    def is_host(self) -> bool:
        return parse_bool(self.config.get("is_host", False))

    @property
    def is_connected(self) -> bool:
        return self.phase == SessionPhase.JOINED and self.transport is not None

    def add_observer(self, observer: Observer) -> None:
        self._observers.append(observer)

    def snapshot(self) -> SessionSnapshot:
        return build_state_snapshot(
            self.phase, self.state, self.timer, self.correlator, self.closer,
        )

    # ── Lifecycle ────────────────────────────────────────────

    async def connect(self) -> None:
        """
        Open the transport and join the room.

        Raises AlreadyConnectedError if the session is not disconnected
        and TransportError if the transport cannot be opened.
        """
        if self.phase != SessionPhase.DISCONNECTED:
            raise AlreadyConnectedError(f"Session is {self.phase.value}")

        self._build_session()
        url = build_play_url(self.config["server_url"], self.config["room_id"])
        self._set_phase(SessionPhase.CONNECTING)

        try:
            self.transport = await self._transport_factory(url)
        except TransportError as e:
            logger.error(f"Connect failed: {e}")
            self.protocol_logger.log_error(str(e))
            self._set_phase(SessionPhase.DISCONNECTED)
            raise

        self.protocol_logger.log_event("WS open")
        self._send(AUTH_JOIN, self._join_payload())
        self._set_phase(SessionPhase.JOINED)

    async def run(self) -> None:
        """Dispatch inbound frames until the transport ends."""
        transport = self.transport
        if transport is None:
            raise NotConnectedError("run() called before connect()")
        try:
            async for frame in transport:
                if self.transport is not transport:
                    break
                self.handle_raw(frame)
        finally:
            if self.transport is transport:
                self.handle_transport_closed()

    def handle_transport_closed(self) -> None:
        """Tear down the session after the transport closed (either side)."""
        if self.transport is None and self.phase == SessionPhase.DISCONNECTED:
            return
        self.transport = None
        self.timer.stop()
        self.closer.on_transport_closed()
        self.correlator.clear(ResolutionReason.DISCONNECTED)
        self.protocol_logger.log_event("WS closed")
        self._set_phase(SessionPhase.DISCONNECTED)

    def _close_transport(self) -> None:
        transport = self.transport
        if transport is not None:
            logger.info("Closing connection")
            transport.close(NORMAL_CLOSURE, CLIENT_CLOSED_REASON)
        self.handle_transport_closed()

    # ── Inbound ──────────────────────────────────────────────

    def handle_raw(self, raw: Frame) -> None:
        """
        Decode, validate and dispatch one inbound frame.

        Protocol errors are logged and the frame is dropped; session
        state is left untouched.
        """
        if self.phase != SessionPhase.JOINED:
            logger.debug("Frame received while not joined; dropped")
            return

        try:
            body = decode_envelope(raw)
        except MalformedMessageError as e:
            self.protocol_logger.log_raw(raw if isinstance(raw, str) else repr(raw))
            log_protocol_error(e)
            return

        errors = validate_envelope(body)
        if errors:
            log_protocol_error(InvalidPayloadError(body.get("type"), body.get("payload"), errors))
            return

        self.protocol_logger.log_received(body["type"])

        try:
            message = parse_inbound(body)
        except UnknownMessageTypeError as e:
            logger.info(f"Ignoring message: {e}")
            return
        except InvalidPayloadError as e:
            log_protocol_error(e)
            return

        self.router.route(message)
        self._notify()

    # ── User actions ─────────────────────────────────────────

    def submit_answer(self, option_index: int) -> SubmitStatus:
        """
        Answer the active question with ``option_index``.

        At most one answer.submit is sent per question. Returns
        AWAITING_SERVER when sent; any other status means nothing was sent.
        """
        if not self.is_connected:
            return SubmitStatus.NOT_CONNECTED

        question = self.state.active_question
        status = self.correlator.check_submit(question)
        if status.accepted and not 0 <= option_index < len(question.options):
            status = SubmitStatus.INVALID_OPTION
        if not status.accepted:
            logger.info(f"Answer not sent: {status.value}")
            return status

        status = self.correlator.submit(question, self.state.user_id)
        self.state.answered = True
        self.state.accepted = False
        payload: AnswerSubmitPayload = {
            "qid": question.question_id,
            "optionIndex": option_index,
            "answerWindowId": question.answer_window_id,
            "clientTs": int(self._clock()),
        }
        self._send(ANSWER_SUBMIT, payload)
        self._notify()
        return status

    def send_host_start(self) -> bool:
        """Ask the server to start the match (host role only)."""
        if not self.is_host:
            logger.warning("host.start ignored: not configured as host")
            return False
        if not self.is_connected:
            logger.warning("host.start ignored: not connected")
            return False
        payload: HostStartPayload = {"roomId": self.state.room_id}
        self._send(HOST_START, payload)
        return True

    def request_close(self) -> CloseState:
        """
        Ask to disconnect.

        Closes immediately when no answer awaits its score; otherwise the
        close happens when the score arrives or the grace period ends.
        """
        if self.transport is None:
            logger.debug("Close requested with no open transport")
            return self.closer.current_state
        previous = self.closer.current_state
        state = self.closer.request_close()
        if state == CloseState.CLOSE_REQUESTED and previous != state:
            self.protocol_logger.log_event("Waiting for score.update before closing")
            self._notify()
        return state

    # ── Internals ────────────────────────────────────────────

    def _join_payload(self) -> AuthJoinPayload:
        return {
            "roomId": self.config["room_id"],
            "userId": self.config["user_id"],
            "token": self.config["token"],
            "device": {
                "ua": self.config["device_ua"],
                "tz": self.config["timezone"] or local_timezone_name(),
                "latencyMs": int(self.config["latency_ms"]),
            },
        }

    def _send(self, message_type: str, payload: Dict[str, Any]) -> None:
        if self.transport is None:
            raise NotConnectedError(f"Cannot send {message_type}: not connected")
        self.transport.send(encode_envelope(build_envelope(message_type, payload)))
        self.protocol_logger.log_sent(message_type)

    def _on_correlation_resolved(
        self, reason: ResolutionReason, correlation: PendingCorrelation
    ) -> None:
        if reason == ResolutionReason.TIMED_OUT:
            self.protocol_logger.log_event(f"No score for {correlation.question_id}")
            self._notify()

    def _set_phase(self, phase: SessionPhase) -> None:
        if phase != self.phase:
            logger.info(f"Phase: {self.phase.value} → {phase.value}")
            self.phase = phase
        self._notify()

    def _notify(self) -> None:
        if not self._observers:
            return
        snapshot = self.snapshot()
        for observer in list(self._observers):
            try:
                observer(snapshot)
            except Exception as e:
                logger.error(f"Observer failed: {e}", exc_info=True)
