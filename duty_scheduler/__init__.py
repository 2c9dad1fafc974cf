"""Weekend duty scheduler — booking, conflict resolution, and duty tickets."""

__version__ = "1.0.0"
