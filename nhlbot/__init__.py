"""
NHL Bot for MeshCore
Answers hockey questions on mesh channels and direct messages
"""

__version__ = "1.0.0"
