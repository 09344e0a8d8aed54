"""
Catalog package.

Responsibilities:
- Define the immutable Webinar / UserProfile / FilterCriteria schema.
- Load the seed catalog from disk and sort it by popularity.
- Expose the filter vocabulary (topics, industries, skill levels).
"""
