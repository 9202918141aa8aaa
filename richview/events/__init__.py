from .events import KeyEvent, ClickEvent, FileBlob, DataTransfer, TransferEvent
from .hotkeys import is_key_hotkey, parse_hotkey
from .media import IMAGE_EXTENSIONS, is_url, is_image, is_image_url, file_to_data_url
from .dispatch import EventDispatcher

__all__ = [
    "KeyEvent",
    "ClickEvent",
    "FileBlob",
    "DataTransfer",
    "TransferEvent",
    "is_key_hotkey",
    "parse_hotkey",
    "IMAGE_EXTENSIONS",
    "is_url",
    "is_image",
    "is_image_url",
    "file_to_data_url",
    "EventDispatcher",
]
