from typing import Dict, Optional, Type

from hnradar.tui.state import (
    Event,
    NavigateDown,
    NavigateUp,
    NextPage,
    OpenStory,
    PrevPage,
    Quit,
    Refresh,
    ToggleComments,
)


class Key:
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    PAGE_UP = "pgup"
    PAGE_DOWN = "pgdown"
    ENTER = "enter"
    ESCAPE = "escape"
    BACKSPACE = "backspace"
    CTRL_C = "ctrl_c"
    UNKNOWN = "unknown"
    Q = "q"
    R = "r"
    C = "c"
    H = "h"
    J = "j"
    K = "k"
    L = "l"


# Keyboard layout mapping: other layouts -> English
LAYOUT_MAP = {
    # Russian layout
    "й": "q",
    "к": "r",
    "с": "c",
    "р": "h",
    "о": "j",
    "л": "k",
    "д": "l",
    # Upper case Russian
    "Й": "Q",
    "К": "R",
    "С": "C",
    "Р": "H",
    "О": "J",
    "Л": "K",
    "Д": "L",
}


KEY_BINDINGS: Dict[str, Type[Event]] = {
    Key.UP: NavigateUp,
    Key.K: NavigateUp,
    Key.DOWN: NavigateDown,
    Key.J: NavigateDown,
    Key.C: ToggleComments,
    Key.PAGE_UP: NextPage,
    Key.L: NextPage,
    Key.PAGE_DOWN: PrevPage,
    Key.H: PrevPage,
    Key.R: Refresh,
    Key.ENTER: OpenStory,
    Key.Q: Quit,
    Key.CTRL_C: Quit,
}


def event_for_key(key: Optional[str]) -> Optional[Event]:
    """Maps a decoded key name onto a state machine event, if it is bound."""
    if key is None:
        return None
    event_class = KEY_BINDINGS.get(key)
    return event_class() if event_class else None
