"""KinderSchutz chat core: safety scanning, canned replies and remote completions."""

__version__ = "1.0.0"
