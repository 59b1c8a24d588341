# Message type constants (stringly-typed protocol; canonical list lives here)

# client -> relay -> other clients
T_TOUCH_UPDATE = "touchUpdate"
T_CLEAR_TOUCHES = "clearTouches"

KNOWN_TYPES = frozenset({T_TOUCH_UPDATE, T_CLEAR_TOUCHES})

# Synthetic contact id used for mouse drags (mice have no touch identifier).
MOUSE_ID = "mouse"
