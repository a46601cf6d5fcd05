"""neurogame: a nine-stage LLM pipeline that turns a game idea into a playable HTML file."""

__version__ = "0.1.0"
