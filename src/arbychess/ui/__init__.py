"""Qt integration layer (requires PyQt6)."""

from arbychess.ui.bridge import BoardBridge

__all__ = ["BoardBridge"]
