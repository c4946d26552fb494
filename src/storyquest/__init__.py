"""storyquest — AI-authored science stories for children, with a local content cache."""

__version__ = "0.1.0"
