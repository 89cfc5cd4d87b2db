"""Service layer: host configuration emitter and the setup CLI."""

from .config_emitter import MergeResult, add_to_config, merge, render, render_block, write_config

__all__ = ["MergeResult", "add_to_config", "merge", "render", "render_block", "write_config"]
