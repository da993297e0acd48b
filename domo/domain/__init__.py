"""Domain layer for Domo.

Pure models and rules: no I/O, no side effects.

Subpackages:
    shared - Result monad, domain errors, base event
    area - life-area domains and their ordering
    task - tasks, sorting, manual positions, grouping
"""
