"""Watch session state machine."""

from .watch_models import WatchPhase


class WatchStateMachine:
    """State machine for one viewer watch session.

    State flow with triggers:
    - LOADING -> NOT_FOUND (missing, malformed or unknown identifier) | ERROR (store failure) | RESOLVED
    - RESOLVED -> ACTIVE_LIVE | ACTIVE_OFFLINE (registration accepted; picked by channel.is_live)
    - every phase except CLOSED -> CLOSED (identifier changed or page torn down)
    - NOT_FOUND, ERROR and CLOSED are terminal for the session; a new identifier
      starts a new session in LOADING
    """

    TRANSITIONS: dict[WatchPhase, set[WatchPhase]] = {
        WatchPhase.LOADING: {
            WatchPhase.NOT_FOUND,
            WatchPhase.ERROR,
            WatchPhase.RESOLVED,
            WatchPhase.CLOSED,
        },
        WatchPhase.RESOLVED: {
            WatchPhase.ACTIVE_LIVE,
            WatchPhase.ACTIVE_OFFLINE,
            WatchPhase.CLOSED,
        },
        WatchPhase.ACTIVE_LIVE: {WatchPhase.CLOSED},
        WatchPhase.ACTIVE_OFFLINE: {WatchPhase.CLOSED},
        WatchPhase.NOT_FOUND: {WatchPhase.CLOSED},
        WatchPhase.ERROR: {WatchPhase.CLOSED},
        WatchPhase.CLOSED: set(),
    }

    # Phases in which no further resolution or registration happens
    TERMINAL_STATES: set[WatchPhase] = {WatchPhase.NOT_FOUND, WatchPhase.ERROR, WatchPhase.CLOSED}

    ACTIVE_STATES: set[WatchPhase] = {WatchPhase.ACTIVE_LIVE, WatchPhase.ACTIVE_OFFLINE}

    @classmethod
    def can_transition(cls, current: WatchPhase, new: WatchPhase) -> bool:
        return new in cls.TRANSITIONS.get(current, set())

    @classmethod
    def is_terminal(cls, phase: WatchPhase) -> bool:
        return phase in cls.TERMINAL_STATES

    @classmethod
    def is_active(cls, phase: WatchPhase) -> bool:
        return phase in cls.ACTIVE_STATES

    @classmethod
    def get_valid_transitions(cls, phase: WatchPhase) -> set[WatchPhase]:
        return cls.TRANSITIONS.get(phase, set())

    @classmethod
    def get_valid_sources(cls, target: WatchPhase) -> set[WatchPhase]:
        return {phase for phase, targets in cls.TRANSITIONS.items() if target in targets}
