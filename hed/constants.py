"""Constants and configuration for the hed editor."""

class EditorConstants:
    """Central configuration constants for the editor."""

    # Rendering
    TAB_STOP = 4  # Tabs expand to the next multiple of this column
    SCROLL_MARGIN = 5  # Rows/columns kept free below and right of the cursor
    STATUS_PATH_WIDTH = 20  # Path is truncated to this many characters in the status line
    NO_NAME = "[No name]"
    NO_FILETYPE = "none"
    WELCOME_MESSAGE = "hed editor -- a small modal editor"
    HELP_MESSAGE = "HELP: Alt-s save, ` quit"

    # Exit confirmation
    NUM_FORCE_QUIT_PRESS = 2  # Extra exit presses required with unsaved changes

    # Characters treated as word separators by the highlighter (besides whitespace and NUL)
    SEPARATOR_CHARS = ",.()+-/*=~%<>[];"

    # File operations
    ATOMIC_SAVE_SUFFIX = ".tmp"  # Suffix for temporary save files

    # Resize handling
    RESIZE_PIPE_MARKER = b'R'  # Byte written to pipe to signal resize

    # Settings
    APP_NAME = "hed"
    SETTINGS_FILENAME = "settings.json"
    KEY_LOG_FILENAME = "key.log"
