# templink/core/output.py
"""
Delivers rendered templates (or inspection listings) to stdout or a file.
"""
import sys
from pathlib import Path
from typing import Optional

import structlog

from templink.exceptions import OutputError

log = structlog.get_logger(__name__)

def emit_rendered(text: str, root: str, output_file: Optional[Path] = None) -> None:
    """Writes the text produced for `root` to `output_file`, or to stdout when none is given."""
    if output_file is None:
        log.debug("emitting_rendered_template", root=root, destination="stdout", size=len(text))
        try:
            sys.stdout.write(text)
        except UnicodeEncodeError as e:
            # the console encoding cannot hold the rendered text; emit utf-8 bytes instead.
            log.warning("stdout_encoding_rejected_rendered_template", root=root, error=str(e))
            sys.stdout.flush()
            sys.stdout.buffer.write(text.encode("utf-8", errors="replace"))
        sys.stdout.flush()
        return

    log.info("emitting_rendered_template", root=root, destination=str(output_file), size=len(text))
    try:
        output_file.write_text(text, encoding="utf-8")
    except OSError as e:
        raise OutputError(f"failed to write output of '{root}' to '{output_file}': {e}") from e
