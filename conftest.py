# Keeps the repository root importable so tests can use ``src.idea_research``.
