"""Audio cue package."""

from .cues import Cue, cue_for_change, synthesize, ensure_cue_files, cue_path

__all__ = ["Cue", "cue_for_change", "synthesize", "ensure_cue_files", "cue_path"]
