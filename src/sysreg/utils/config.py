"""
Configuration constants and formatter options
"""

from dataclasses import dataclass

from typing_extensions import Final

# Generated identifiers
NOTIFY_IDENTIFIER: Final = "__es6_export__"  # parameter of the outer register function
SETTER_PARAMETER: Final = "m"                # parameter of every setter function
DEFAULT_EXPORT_NAME: Final = "default"

# Registration call: System.register(name?, deps, declare)
REGISTER_OBJECT: Final = "System"
REGISTER_METHOD: Final = "register"
SETTERS_KEY: Final = "setters"
EXECUTE_KEY: Final = "execute"
USE_STRICT: Final = "use strict"

# Module naming
MODULE_ID_SUFFIX: Final = "$$"        # path/to/foo -> path$to$foo$$
MODULE_PATH_SEPARATOR: Final = "/"
MODULE_FILE_EXTENSIONS: Final = (".js", ".json")

# File encoding constants
DEFAULT_FILE_ENCODING: Final = "utf-8"

# Printer
INDENT: Final = "  "

# Words that cannot follow a `.` in ES3 member access
RESERVED_WORDS: Final = frozenset({
    "break", "case", "catch", "class", "const", "continue", "debugger", "default",
    "delete", "do", "else", "enum", "export", "extends", "false", "finally", "for",
    "function", "if", "import", "in", "instanceof", "new", "null", "return", "super",
    "switch", "this", "throw", "true", "try", "typeof", "var", "void", "while", "with",
})


@dataclass(frozen=True)
class FormatterOptions:
    """
    Options for SystemFormatter.

    anonymous: omit the module name argument (output meant for bundling)
    """
    anonymous: bool = False
    notify_identifier: str = NOTIFY_IDENTIFIER
    setter_parameter: str = SETTER_PARAMETER
