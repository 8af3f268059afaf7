"""LinkGuard - heuristic URL trust scoring."""

__version__ = "0.1.0"

from linkguard.engine import HeuristicEngine, analyze  # noqa: E402
from linkguard.normalizer import MalformedURL  # noqa: E402

__all__ = ["HeuristicEngine", "MalformedURL", "__version__", "analyze"]
