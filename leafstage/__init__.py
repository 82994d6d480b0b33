"""A side-scrolling arcade game: a split-screen stage, menus, a two-player duel and a minimap demo."""

__version__ = "0.1.0"