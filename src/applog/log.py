"""Internal diagnostics for applog.

The package's own chatter (config problems, sink resolution, child process
handling) goes to <tmpdir>/applog.log via Python's logging module, never to
the display or journal sinks it manages.
Filter with grep: grep 'applog.config' /tmp/applog.log
"""

import logging
import tempfile
from pathlib import Path

_LOG_PATH = Path(tempfile.gettempdir()) / "applog.log"

# delay=True: nothing is created on disk until the first record
_handler = logging.FileHandler(_LOG_PATH, delay=True)
_handler.setFormatter(logging.Formatter("%(asctime)s %(name)s %(message)s", datefmt="%H:%M:%S"))

_root = logging.getLogger("applog")
_root.addHandler(_handler)
_root.setLevel(logging.DEBUG)
# don't propagate to root logger (avoids duplicate output if the host
# application configures the root logger)
_root.propagate = False


def get_logger(name: str) -> logging.Logger:
    return _root.getChild(name)
