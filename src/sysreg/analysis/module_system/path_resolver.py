"""
Module Path Resolution

Maps authored dependency paths and file paths to module names:
- "./b" imported from "lib/a"   -> "lib/b"
- "../util.js" from "lib/a"     -> "util"
- "rsvp" (bare)                 -> "rsvp"
- lib/a.json under root         -> "lib/a"

Also derives the module id used bare in generated code. This class is
stateless and can be shared/reused.
"""

import logging
import posixpath
import re
from pathlib import Path, PurePosixPath
from typing import Optional, Union

from ...utils.config import MODULE_FILE_EXTENSIONS, MODULE_ID_SUFFIX, MODULE_PATH_SEPARATOR

logger = logging.getLogger(__name__)

_NON_IDENTIFIER_CHAR = re.compile(r"[^A-Za-z0-9_$]")


class PathResolver:
    """Pure path resolution for ES module names."""

    def normalize(self, name: str) -> str:
        """Strip known extensions and redundant segments."""
        name = name.replace("\\", MODULE_PATH_SEPARATOR)
        for ext in MODULE_FILE_EXTENSIONS:
            if name.endswith(ext):
                name = name[: -len(ext)]
                break
        normalized = posixpath.normpath(name)
        return normalized[2:] if normalized.startswith("./") else normalized

    def resolve(self, path: str, importer: Optional[str] = None) -> str:
        """Resolve an authored dependency path against the importing module's name."""
        if importer is not None and (path.startswith("./") or path.startswith("../")):
            base = posixpath.dirname(importer)
            resolved = self.normalize(posixpath.join(base, path))
        else:
            resolved = self.normalize(path)
        logger.debug(f"Resolved {path!r} from {importer!r} to {resolved!r}")
        return resolved

    def name_for_file(self, file_path: Union[Path, str], root: Union[Path, str]) -> str:
        """Module name of a file: its path relative to root, without extension."""
        relative = Path(file_path).resolve().relative_to(Path(root).resolve())
        return self.normalize(str(PurePosixPath(*relative.parts)))

    def module_id(self, name: str) -> str:
        """
        Identifier for a module name.

            path/to/foo -> path$to$foo$$
            1           -> $1$$
        """
        ident = _NON_IDENTIFIER_CHAR.sub("$", name)
        if ident[:1].isdigit():
            ident = "$" + ident
        return ident + MODULE_ID_SUFFIX
