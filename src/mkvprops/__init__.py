"""mkvprops - Matroska track flag and property editing.

Wraps mkvpropedit and mkvmerge to list editable properties, read a file's
track state, and apply batches of property edits.
"""

__version__ = "0.1.0"
