"""
Compilation - transforms notes, tracks and clips into DAW messages.

The pipeline:
    Score section → Notes → Message batch → transport (external)
"""

from chuk_mcp_fluid.compiler.messages import (
    add_note,
    batch_to_dicts,
    clear_clip,
    create_clip,
    save_session,
    select_clip,
    select_plugin,
    select_track,
    set_param,
)

__all__ = [
    "add_note",
    "batch_to_dicts",
    "clear_clip",
    "create_clip",
    "save_session",
    "select_clip",
    "select_plugin",
    "select_track",
    "set_param",
]
