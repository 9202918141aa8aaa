from .editor_router import create_editor_router, EditorState

__all__ = ["create_editor_router", "EditorState"]
