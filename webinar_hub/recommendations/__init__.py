"""
Recommendation engine.

Responsibilities:
- Match a user profile against the catalog and explain each match.
- Filter the catalog by the user's selected criteria.
- Split filtered webinars into recommended and other webinars.
- Track recommendation, filter and registration state as immutable snapshots.
"""
