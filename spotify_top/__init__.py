"""
Spotify Top

A terminal viewer for your Spotify listening statistics: top tracks and top
artists over the last four weeks, six months, or all time.
"""

__version__ = "0.1.0"
