from dojo_engine.services.progress_tracker import ProgressTracker
from dojo_engine.services.session_engine import SessionEngine, SessionState

__all__ = ["ProgressTracker", "SessionEngine", "SessionState"]
