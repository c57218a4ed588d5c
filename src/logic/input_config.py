from src.hardware.config.keys import key, mouse
from src.hardware.config.notes import NoteId

# ------------------------------------------------------------------
# Long-press combos (seconds)
# ------------------------------------------------------------------

COMBO_HOLD_SEC = 3.0

# Hold both inputs to open the listen-and-repeat prompt
GAME_COMBO_INPUTS = (key("arrowleft"), mouse(2))

# Hold both notes to flip sine <-> square
TONE_COMBO_NOTES = (NoteId.C4, NoteId.D4)

# ------------------------------------------------------------------
# Voice envelope
# ------------------------------------------------------------------

PEAK_GAIN = 0.8
ATTACK_SEC = 0.010
RELEASE_SEC = 0.050
STOP_PAD_SEC = 0.010  # output stops this long after the release ramp ends

# ------------------------------------------------------------------
# Listen & repeat game
# ------------------------------------------------------------------

MELODY_LENGTH = 5
LEAD_IN_SEC = 1.5
CUE_HOLD_SEC = 0.5
CUE_GAP_SEC = 0.2
PROMPT_HIDE_SEC = 2.0

LISTEN_PROMPT = ("Listen carefully to the melody...", "#ffe8a0")
PLAY_PROMPT = ("Now play it back!", "#70f470")
