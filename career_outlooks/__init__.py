"""Career outlook matching for post-secondary programs.

Expands a program credential into synonym phrases, pairs them with search
keywords, and scans NOC employment requirements for occupations a graduate
could plausibly enter.
"""

__version__ = "1.0.0"
