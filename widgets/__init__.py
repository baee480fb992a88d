from .header import Header
from .help_screen import HelpScreen
from .folder_prompt import FolderPromptScreen

__all__ = [
    "Header",
    "HelpScreen",
    "FolderPromptScreen",
]
