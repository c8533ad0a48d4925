"""Project favicon engine.

Maps a project directory to a favicon: an icon file found in the project
tree, or a synthesized SVG badge when none exists. Both outcomes are cached
in memory so frequent polling never re-walks the filesystem.
"""

__version__ = "1.0.0"
