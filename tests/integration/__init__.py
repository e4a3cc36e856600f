"""
Integration tests against real infrastructure pieces.

- SQL booking repository on sqlite+aiosqlite (in memory)
- Deadlock retry around store writes
"""
