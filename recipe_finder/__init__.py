"""
Recipe Finder: a browser-driving agent session for AllRecipes.

Packages:
- browser: chrome-devtools server launch args and tool allow-list
- agent: session configuration and the normalized event stream
- config: model / turn settings
- observability: logging setup
"""

__version__ = "0.1.0"
