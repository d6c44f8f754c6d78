"""
Commit Form

Interactive terminal form for composing structured commit messages.
"""

__version__ = "1.0.0"

# Commit types offered by the form, value -> label, in display order
COMMIT_TYPES = {
    'feat': 'Feature',
    'fix': 'Fixbug',
    'docs': 'Documentation',
    'style': 'Style',
    'refactor': 'Refactor',
    'perf': 'Performance',
    'test': 'Tests',
    'chore': 'Maintenance',
}
