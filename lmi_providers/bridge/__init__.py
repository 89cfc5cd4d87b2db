"""Line-oriented request/response bridge between a host process and providers.

- :class:`BridgeServer`: the stdin/stdout dispatch loop.
- :class:`BridgeClient`: host-side client spawning the server subprocess.
- :func:`run_bridge` / :func:`main`: process entry points.
"""

from .client import BridgeClient
from .runner import main, run_bridge
from .server import BridgeServer, BridgeTerminated

__all__ = ["BridgeClient", "BridgeServer", "BridgeTerminated", "main", "run_bridge"]
