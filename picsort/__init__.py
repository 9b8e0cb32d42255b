"""
Picsort - Media file sorting tool.

Sorts image and video files between folders by:
- Listing supported media in a directory, in natural order
- Moving files with collision-safe renaming and undo
- Generating cached thumbnails (Pillow, ffmpeg for video frames)
- Watching a directory and reporting debounced changes
"""

__version__ = "0.1.0"
