"""Academic Tracker: subjects, scores and goals per student.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
