"""Quick markdown notes opened in $EDITOR and picked with fzf."""

__version__ = "0.1.0"
