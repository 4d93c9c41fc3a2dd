"""learnindex - metadata index for phase/topic/depth learning content."""

__version__ = "0.1.0"
