"""
LLM integration layer.

Responsibilities:
- Manage Groq API configuration and credentials.
- Build the webinar recommendation prompt from a profile and the catalog.
- Ask the model for a short natural-language summary of the recommendations.
- Never influence which webinars are recommended.
"""
